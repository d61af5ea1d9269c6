# heldout/evaluation/evaluator.py
from __future__ import annotations

from typing import List, Sequence

import numpy as np
from sklearn.metrics import accuracy_score, cohen_kappa_score

from heldout.core.interfaces import PerformanceEvaluator
from heldout.core.types import Example, Measurement
from heldout.evaluation.predictions import max_index


class BasicClassificationPerformanceEvaluator(PerformanceEvaluator):
    """
    BasicClassificationPerformanceEvaluator (FINAL)

    Responsibility:
    - Accumulate (true class, predicted class) since the last reset()
    - Return ordered measurements (no side effects)

    Contract:
    - predicted class = first arg-max of the vote vector
    - examples with a missing label are ignored
    - empty / degenerate statistics are NaN, never an exception
    """

    def __init__(self):
        self._y_true: List[int] = []
        self._y_pred: List[int] = []

    def reset(self) -> None:
        self._y_true = []
        self._y_pred = []

    def add_result(self, example: Example, votes: Sequence[float]) -> None:
        if example.label_missing:
            return
        self._y_true.append(int(example.y))
        self._y_pred.append(max_index(votes))

    def performance_measurements(self) -> List[Measurement]:
        n = len(self._y_true)

        if n == 0:
            accuracy = float("nan")
            kappa = float("nan")
        else:
            accuracy = float(accuracy_score(self._y_true, self._y_pred))
            # single-class passes divide 0 by 0 -> NaN
            with np.errstate(divide="ignore", invalid="ignore"):
                kappa = float(cohen_kappa_score(self._y_true, self._y_pred))

        return [
            Measurement("classified instances", float(n)),
            Measurement("classifications correct (percent)", accuracy * 100.0),
            Measurement("Kappa Statistic (percent)", kappa * 100.0),
        ]
