import numpy as np
import pytest

from arow_classifier.errors import CorruptData, InvalidArgument
from arow_classifier.state import ClassifierState


def test_fresh_state_defaults() -> None:
    state = ClassifierState(4)
    assert state.dimension == 4
    assert state.r == pytest.approx(0.1)
    assert state.mean.tolist() == [0.0, 0.0, 0.0, 0.0]
    assert state.cov.tolist() == [1.0, 1.0, 1.0, 1.0]


@pytest.mark.parametrize("dimension, r", [(0, 0.1), (-3, 0.1), (3, 0.0), (3, -1.0), (3, float("nan"))])
def test_constructor_rejects_bad_arguments(dimension: int, r: float) -> None:
    with pytest.raises(InvalidArgument):
        ClassifierState(dimension, r)


def test_from_buffers_copies_inputs() -> None:
    mean = np.array([1.0, 2.0])
    cov = np.array([0.5, 0.25])
    state = ClassifierState.from_buffers(2, mean, cov, 1.0)
    mean[0] = 99.0
    assert state.mean[0] == 1.0
    assert state.cov.tolist() == [0.5, 0.25]


@pytest.mark.parametrize(
    "mean, cov",
    [
        ([1.0], [1.0, 1.0]),
        ([1.0, 2.0], [1.0, 0.0]),
        ([1.0, 2.0], [1.0, -2.0]),
        ([float("nan"), 2.0], [1.0, 1.0]),
        ([1.0, 2.0], [float("inf"), 1.0]),
    ],
)
def test_from_buffers_revalidates_invariants(mean: list[float], cov: list[float]) -> None:
    with pytest.raises(InvalidArgument):
        ClassifierState.from_buffers(2, mean, cov, 1.0)


def test_reconfigure_validates_r() -> None:
    state = ClassifierState(2, 0.1)
    state.reconfigure(2.5)
    assert state.r == 2.5
    with pytest.raises(InvalidArgument):
        state.reconfigure(0.0)
    assert state.r == 2.5


def test_copy_is_independent_and_equal() -> None:
    state = ClassifierState.from_buffers(3, [1.0, 2.0, 3.0], [4.0, 5.0, 6.0], 1.0)
    clone = state.copy()
    assert clone == state
    clone.mean[0] = -1.0
    assert clone != state
    assert state.mean[0] == 1.0


def test_validate_flags_corrupted_buffers() -> None:
    state = ClassifierState(2)
    state.validate()
    state.cov[1] = 0.0
    with pytest.raises(CorruptData):
        state.validate()


@pytest.mark.parametrize(
    "mean, cov",
    [
        (["1.5"], ["1"]),
        ([1.5], ["1"]),
        ([None], [1.0]),
        ([[1.0], [2.0, 3.0]], [1.0]),
    ],
)
def test_from_buffers_rejects_non_numeric_buffers(mean: list, cov: list) -> None:
    with pytest.raises(InvalidArgument):
        ClassifierState.from_buffers(1, mean, cov, 1.0)


def test_from_buffers_accepts_integer_buffers() -> None:
    state = ClassifierState.from_buffers(2, np.array([1, -2]), [3, 4], 1.0)
    assert state.mean.dtype == np.float64
    assert state.cov.tolist() == [3.0, 4.0]
