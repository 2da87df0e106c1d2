"""Adaptive Regularization of Weight Vectors (AROW).

Online update and prediction for a confidence-weighted linear classifier.
See K. Crammer, A. Kulesza and M. Dredze, "Adaptive regularization of weight
vectors", NIPS 2009.

Update rule for one example ``(f, y)`` with ``y`` in {+1, -1}:

    m = mean . f
    if y * m >= 1: no change
    beta  = 1 / (sum(cov[i] * f[i]^2) + r)
    alpha = (1 - y * m) * beta
    mean[i] += alpha * cov[i] * y * f[i]         (using the old cov)
    cov[i]   = 1 / (1 / cov[i] + f[i]^2 / r)

The model changes whenever the hinge condition is violated, but the loss
reported back is zero-one (``y * m < 0``).
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import TYPE_CHECKING, Iterable, Tuple

import numpy as np

from . import codec, combine
from .errors import InvalidArgument, InvalidLabel
from .scoring import SparseFeatureVector, _confidence, _margin, confidence, feature_arrays, margin
from .state import DEFAULT_R, ClassifierState
from .stats import TrainingStats

if TYPE_CHECKING:
    from .config import ArowSettings

logger = logging.getLogger(__name__)

Example = Tuple[SparseFeatureVector, int]


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a single update.

    Attributes:
        loss: Zero-one loss of the prediction made before the update.
        updated: True when the mean and covariance were changed.
        margin: Margin of the example before the update.
    """

    loss: int
    updated: bool
    margin: float


def _check_label(label: int) -> int:
    if isinstance(label, bool) or label not in (1, -1):
        raise InvalidLabel(f"label must be +1 or -1, got {label!r}")
    return int(label)


def update_with_info(state: ClassifierState, f: SparseFeatureVector, label: int) -> UpdateResult:
    """Apply the AROW update for one example and report what happened.

    Either both buffers are updated for every index in ``f`` or nothing is.

    Raises:
        InvalidLabel: If ``label`` is not +1 or -1.
        IndexOutOfRange: If ``f`` has an index outside the dimension.
        InvalidArgument: If ``f`` is malformed or the step would leave the
            buffers non-finite.
    """

    label = _check_label(label)
    indices, values = feature_arrays(state, f)

    score = _margin(state, indices, values)
    if score * label >= 1:
        return UpdateResult(loss=0, updated=False, margin=score)

    beta = 1.0 / (_confidence(state, indices, values) + state.r)
    alpha = (1.0 - label * score) * beta

    # Both new buffers are computed from the old covariance before either is written.
    old_cov = state.cov[indices]
    new_mean = state.mean[indices] + alpha * old_cov * label * values
    new_cov = 1.0 / (1.0 / old_cov + values * values / state.r)
    if not (np.isfinite(new_mean).all() and np.isfinite(new_cov).all() and (new_cov > 0).all()):
        raise InvalidArgument("update would produce non-finite or non-positive model values")

    state.mean[indices] = new_mean
    state.cov[indices] = new_cov

    loss = 1 if score * label < 0 else 0
    logger.debug("model_updated", extra={"margin": score, "alpha": alpha, "loss": loss, "features": len(indices)})
    return UpdateResult(loss=loss, updated=True, margin=score)


def update(state: ClassifierState, f: SparseFeatureVector, label: int) -> int:
    """Apply the AROW update for one example and return its zero-one loss."""

    return update_with_info(state, f, label).loss


def predict(state: ClassifierState, f: SparseFeatureVector) -> int:
    """Return +1 when the margin is strictly positive, otherwise -1."""

    return 1 if margin(state, f) > 0 else -1


def fit(state: ClassifierState, examples: Iterable[Example]) -> TrainingStats:
    """Run one online pass over ``examples`` in the order given."""

    stats = TrainingStats()
    for f, label in examples:
        result = update_with_info(state, f, label)
        stats.record(result.loss, result.updated)
    logger.info(
        "epoch_completed",
        extra={"examples": stats.examples, "mistakes": stats.mistakes, "updates": stats.updates},
    )
    return stats


class ArowClassifier:
    """Object wrapper that owns one :class:`ClassifierState`."""

    def __init__(self, dimension: int, r: float = DEFAULT_R) -> None:
        """Create a classifier with a fresh state.

        Args:
            dimension: Number of features.
            r: Regularization hyperparameter, strictly positive.
        """

        self._state = ClassifierState(dimension, r)

    @classmethod
    def from_state(cls, state: ClassifierState) -> "ArowClassifier":
        """Wrap an existing state without copying it."""

        classifier = cls.__new__(cls)
        classifier._state = state
        return classifier

    @classmethod
    def from_settings(cls, settings: "ArowSettings") -> "ArowClassifier":
        """Create a fresh classifier from the `model` section of the settings."""

        return cls(settings.model.dimension, settings.model.r)

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> "ArowClassifier":
        """Restore a classifier written by :meth:`save`."""

        return cls.from_state(codec.load(path))

    @property
    def state(self) -> ClassifierState:
        """Return the underlying state."""

        return self._state

    @property
    def dimension(self) -> int:
        """Return the declared number of features."""

        return self._state.dimension

    @property
    def r(self) -> float:
        """Return the regularization hyperparameter."""

        return self._state.r

    @r.setter
    def r(self, value: float) -> None:
        """Reconfigure the hyperparameter; the learned buffers are kept."""

        self._state.reconfigure(value)

    def margin(self, f: SparseFeatureVector) -> float:
        return margin(self._state, f)

    def confidence(self, f: SparseFeatureVector) -> float:
        return confidence(self._state, f)

    def update(self, f: SparseFeatureVector, label: int) -> int:
        return update(self._state, f, label)

    def predict(self, f: SparseFeatureVector) -> int:
        return predict(self._state, f)

    def fit(self, examples: Iterable[Example]) -> TrainingStats:
        """Run one online pass over ``examples``."""

        return fit(self._state, examples)

    def merge(self, other: "ArowClassifier") -> "ArowClassifier":
        """Return a new classifier averaging this one with ``other``."""

        return ArowClassifier.from_state(combine.merge(self._state, other._state))

    def merge_into(self, other: "ArowClassifier") -> "ArowClassifier":
        """Average ``other`` into this classifier in place and return self."""

        combine.merge_into(self._state, other._state)
        return self

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the state to ``path`` in the binary model format."""

        codec.save(self._state, path)

    def __repr__(self) -> str:
        return f"ArowClassifier(dimension={self.dimension}, r={self.r!r})"

