import threading

import numpy as np

from arow_classifier.arow import fit, predict
from arow_classifier.combine import merge_all
from arow_classifier.state import ClassifierState
from arow_classifier.stats import TrainingStats

DIMENSION = 50


def _make_examples(seed: int, count: int) -> list[tuple[dict[int, float], int]]:
    rng = np.random.default_rng(seed)
    true_weights = np.linspace(-1.0, 1.0, DIMENSION)
    examples = []
    for _ in range(count):
        indices = rng.choice(DIMENSION, size=6, replace=False)
        values = rng.uniform(0.5, 1.5, size=6)
        score = float(np.dot(true_weights[indices], values))
        examples.append(({int(i): float(v) for i, v in zip(indices, values)}, 1 if score > 0 else -1))
    return examples


def test_shard_training_then_merge() -> None:
    shards = [_make_examples(seed, 300) for seed in range(4)]
    states = [ClassifierState(DIMENSION, 0.1) for _ in shards]
    results: list[TrainingStats | None] = [None] * len(shards)
    errors: list[Exception] = []

    def worker(position: int) -> None:
        try:
            results[position] = fit(states[position], shards[position])
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(len(shards))]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    combined = merge_all(states)
    combined.validate()
    assert all(stats is not None and stats.examples == 300 for stats in results)

    held_out = _make_examples(99, 200)
    correct = sum(predict(combined, f) == label for f, label in held_out)
    assert correct / len(held_out) > 0.75
