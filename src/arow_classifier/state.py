"""Classifier state: per-feature mean weights and diagonal covariance.

The state keeps two dense buffers sized to the full declared dimension so
that every feature index maps to O(1) array access, even though the inputs
themselves are sparse.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .errors import CorruptData, InvalidArgument

DEFAULT_R = 0.1


def _check_dimension(dimension: int) -> int:
    if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)):
        raise InvalidArgument(f"dimension must be an integer, got {type(dimension).__name__}")
    if dimension <= 0:
        raise InvalidArgument("dimension must be positive")
    return int(dimension)


def _check_r(r: float) -> float:
    try:
        r = float(r)
    except (TypeError, ValueError):
        raise InvalidArgument(f"r must be a real number, got {r!r}") from None
    if not math.isfinite(r) or r <= 0:
        raise InvalidArgument("r must be a positive finite number")
    return r


def _real_buffer(name: str, values: Sequence[float] | np.ndarray) -> np.ndarray:
    try:
        raw = np.asarray(values)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be a sequence of real numbers") from exc
    # Only integer and floating dtypes; strings and objects are not coerced.
    if raw.dtype.kind not in "iuf":
        raise InvalidArgument(f"{name} must hold real numbers, got dtype {raw.dtype}")
    return np.array(raw, dtype=np.float64, copy=True)


class ClassifierState:
    """Mean vector, diagonal covariance and the hyperparameter ``r``.

    Invariants held before and after every operation:
        * ``len(mean) == len(cov) == dimension``
        * ``r > 0``
        * every ``cov[i] > 0``
        * no entry of ``mean`` or ``cov`` is NaN or infinite
    """

    __slots__ = ("_dimension", "_r", "mean", "cov")

    def __init__(self, dimension: int, r: float = DEFAULT_R) -> None:
        """Create a fresh state with zero mean and unit covariance.

        Args:
            dimension: Number of features, fixed for the lifetime of the state.
            r: Regularization hyperparameter, strictly positive.

        Raises:
            InvalidArgument: If ``dimension`` is not positive or ``r <= 0``.
        """

        self._dimension = _check_dimension(dimension)
        self._r = _check_r(r)
        self.mean = np.zeros(self._dimension, dtype=np.float64)
        self.cov = np.ones(self._dimension, dtype=np.float64)

    @classmethod
    def from_buffers(
        cls,
        dimension: int,
        mean: Sequence[float] | np.ndarray,
        cov: Sequence[float] | np.ndarray,
        r: float,
    ) -> "ClassifierState":
        """Rebuild a state from existing buffers, re-validating every invariant.

        The buffers are copied, so the new state never aliases caller memory.

        Raises:
            InvalidArgument: If any invariant does not hold.
        """

        dimension = _check_dimension(dimension)
        r = _check_r(r)
        mean = _real_buffer("mean", mean)
        cov = _real_buffer("cov", cov)
        state = cls._adopt(dimension, mean, cov, r)
        state._validate_buffers(InvalidArgument)
        return state

    @property
    def dimension(self) -> int:
        """Return the declared number of features."""

        return self._dimension

    @property
    def r(self) -> float:
        """Return the regularization hyperparameter."""

        return self._r

    def reconfigure(self, r: float) -> None:
        """Replace the hyperparameter ``r``; the buffers are left untouched."""

        self._r = _check_r(r)

    @classmethod
    def _adopt(cls, dimension: int, mean: np.ndarray, cov: np.ndarray, r: float) -> "ClassifierState":
        # Takes ownership of the buffers without copying or validating them.
        state = cls.__new__(cls)
        state._dimension = dimension
        state._r = r
        state.mean = mean
        state.cov = cov
        return state

    def copy(self) -> "ClassifierState":
        return ClassifierState._adopt(self._dimension, self.mean.copy(), self.cov.copy(), self._r)

    def validate(self) -> None:
        """Check all invariants, raising :class:`CorruptData` on failure."""

        if not math.isfinite(self._r) or self._r <= 0:
            raise CorruptData("r must be a positive finite number")
        self._validate_buffers(CorruptData)

    def _validate_buffers(self, error: type[Exception]) -> None:
        if self.mean.shape != (self._dimension,) or self.cov.shape != (self._dimension,):
            raise error(
                f"mean and cov must both have length {self._dimension}, "
                f"got {self.mean.size} and {self.cov.size}"
            )
        if not np.isfinite(self.mean).all():
            raise error("mean must contain only finite values")
        if not np.isfinite(self.cov).all() or not (self.cov > 0).all():
            raise error("cov must contain only positive finite values")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassifierState):
            return NotImplemented
        return (
            self._dimension == other._dimension
            and self._r == other._r
            and np.array_equal(self.mean, other.mean)
            and np.array_equal(self.cov, other.cov)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ClassifierState(dimension={self._dimension}, r={self._r!r})"
