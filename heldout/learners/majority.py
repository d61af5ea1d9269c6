# heldout/learners/majority.py
from __future__ import annotations

from typing import List

from heldout.core.interfaces import Learner
from heldout.core.types import Example, Measurement, StreamHeader


class MajorityClassLearner(Learner):
    """Votes are the observed class counts."""

    def __init__(self):
        self._counts: List[float] = []
        self._trained = 0

    def set_context(self, header: StreamHeader) -> None:
        self._counts = [0.0] * header.num_classes
        self._trained = 0

    def train_on_example(self, example: Example) -> None:
        if example.label_missing:
            return
        self._counts[example.y] += 1.0
        self._trained += 1

    def predict_votes(self, example: Example) -> List[float]:
        return list(self._counts)

    def model_measurements(self) -> List[Measurement]:
        return [Measurement("model training instances", float(self._trained))]
