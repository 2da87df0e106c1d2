"""Combine independently trained models by elementwise averaging.

Each shard of the training data is learned into its own state; the shards
are then folded together pairwise. No weighting by shard size is applied.
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

import numpy as np

from .errors import DimensionMismatch, InvalidArgument
from .state import ClassifierState

logger = logging.getLogger(__name__)


def _averaged(a: ClassifierState, b: ClassifierState) -> Tuple[np.ndarray, np.ndarray]:
    if a.dimension != b.dimension:
        raise DimensionMismatch(f"cannot combine models of dimension {a.dimension} and {b.dimension}")
    return _midpoint(a.mean, b.mean), _midpoint(a.cov, b.cov)


def _midpoint(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    # Halve before adding only where the sum overflows; elsewhere halving first
    # would lose precision on subnormal values.
    with np.errstate(over="ignore"):
        total = x + y
    total /= 2
    overflowed = ~np.isfinite(total)
    if overflowed.any():
        total[overflowed] = x[overflowed] * 0.5 + y[overflowed] * 0.5
    return total


def merge(a: ClassifierState, b: ClassifierState) -> ClassifierState:
    """Return a new state averaging ``a`` and ``b``; ``r`` is taken from ``a``.

    Raises:
        DimensionMismatch: If the two states have different dimensions.
    """

    mean, cov = _averaged(a, b)
    merged = ClassifierState._adopt(a.dimension, mean, cov, a.r)
    logger.info("models_merged", extra={"dimension": a.dimension, "in_place": False})
    return merged


def merge_into(a: ClassifierState, b: ClassifierState) -> ClassifierState:
    """Average ``b`` into ``a`` in place and return ``a``; ``b`` is unchanged."""

    mean, cov = _averaged(a, b)
    a.mean[:] = mean
    a.cov[:] = cov
    logger.info("models_merged", extra={"dimension": a.dimension, "in_place": True})
    return a


def merge_all(states: Iterable[ClassifierState]) -> ClassifierState:
    """Fold ``merge`` left to right over ``states``.

    With more than two inputs this is repeated pairwise averaging, so later
    states carry more weight than earlier ones.
    """

    iterator = iter(states)
    try:
        result = next(iterator)
    except StopIteration:
        raise InvalidArgument("merge_all requires at least one state") from None
    result = result.copy()
    for state in iterator:
        merge_into(result, state)
    return result
