"""Margin and confidence of a sparse feature vector against a state."""

from __future__ import annotations

import math
from typing import Mapping, Tuple

import numpy as np

from .errors import IndexOutOfRange, InvalidArgument
from .state import ClassifierState

SparseFeatureVector = Mapping[int, float]


def feature_arrays(state: ClassifierState, f: SparseFeatureVector) -> Tuple[np.ndarray, np.ndarray]:
    """Validate ``f`` and split it into parallel index and value arrays.

    Raises:
        InvalidArgument: If ``f`` is not a mapping or holds a non-finite value.
        IndexOutOfRange: If a key is not an integer in ``[0, dimension)``.
    """

    if not isinstance(f, Mapping):
        raise InvalidArgument(f"feature vector must be a mapping, got {type(f).__name__}")

    count = len(f)
    indices = np.empty(count, dtype=np.intp)
    values = np.empty(count, dtype=np.float64)
    for position, (index, value) in enumerate(f.items()):
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise IndexOutOfRange(f"feature index must be an integer, got {index!r}")
        if not 0 <= index < state.dimension:
            raise IndexOutOfRange(f"feature index {index} outside [0, {state.dimension})")
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidArgument(f"feature {index} has non-numeric value {value!r}") from None
        if not math.isfinite(value):
            raise InvalidArgument(f"feature {index} has non-finite value {value!r}")
        indices[position] = index
        values[position] = value
    return indices, values


def margin(state: ClassifierState, f: SparseFeatureVector) -> float:
    """Return ``sum(mean[i] * f[i])`` over the indices present in ``f``."""

    indices, values = feature_arrays(state, f)
    return _margin(state, indices, values)


def confidence(state: ClassifierState, f: SparseFeatureVector) -> float:
    """Return ``sum(cov[i] * f[i] ** 2)``; always non-negative."""

    indices, values = feature_arrays(state, f)
    return _confidence(state, indices, values)


def _margin(state: ClassifierState, indices: np.ndarray, values: np.ndarray) -> float:
    return float(np.dot(state.mean[indices], values))


def _confidence(state: ClassifierState, indices: np.ndarray, values: np.ndarray) -> float:
    return float(np.dot(state.cov[indices], values * values))
