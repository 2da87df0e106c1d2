"""Running statistics for online training."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TrainingStats:
    """Online counters for a stream of updates.

    ``mistakes`` counts zero-one losses reported by ``update`` while
    ``updates`` counts calls that changed the model (hinge violations), so
    ``updates >= mistakes`` always holds.
    """

    examples: int = 0
    mistakes: int = 0
    updates: int = 0

    def record(self, loss: int, updated: bool) -> None:
        self.examples += 1
        self.mistakes += loss
        if updated:
            self.updates += 1

    def merge(self, other: "TrainingStats") -> "TrainingStats":
        """Return counters summed across two shards."""

        return TrainingStats(
            examples=self.examples + other.examples,
            mistakes=self.mistakes + other.mistakes,
            updates=self.updates + other.updates,
        )

    @property
    def error_rate(self) -> float:
        if self.examples == 0:
            return 0.0
        return self.mistakes / self.examples
