import pytest

from arow_classifier.stats import TrainingStats


def test_training_stats_counts() -> None:
    stats = TrainingStats()
    assert stats.error_rate == 0.0
    stats.record(1, True)
    stats.record(0, True)
    stats.record(0, False)
    stats.record(0, False)
    assert (stats.examples, stats.mistakes, stats.updates) == (4, 1, 2)
    assert stats.error_rate == pytest.approx(0.25)


def test_training_stats_merge() -> None:
    merged = TrainingStats(examples=10, mistakes=2, updates=5).merge(TrainingStats(examples=6, mistakes=1, updates=3))
    assert merged == TrainingStats(examples=16, mistakes=3, updates=8)
