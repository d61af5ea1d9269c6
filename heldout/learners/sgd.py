# heldout/learners/sgd.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
from sklearn.linear_model import SGDClassifier

from heldout.core.interfaces import Learner
from heldout.core.types import Example, Measurement, StreamHeader


class SGDClassifierLearner(Learner):
    """
    SGDClassifierLearner (ONLINE)

    Event-stream training: one partial_fit per labelled example.

    Contract:
    - set_context() fixes the class set; the first update passes it
      to partial_fit, later updates do not
    - examples with a missing label are not trained on
    - votes are predict_proba when the loss supports it,
      otherwise a one-hot vote for predict()
    - before the first update every vote is 0.0
    """

    def __init__(self, **model_params: Any):
        self.model_params: Dict[str, Any] = {"loss": "log_loss", **model_params}
        self._model: Optional[SGDClassifier] = None
        self._header: Optional[StreamHeader] = None
        self._classes: Optional[np.ndarray] = None
        self._trained = 0

    def set_context(self, header: StreamHeader) -> None:
        self._header = header
        self._classes = np.arange(header.num_classes)
        self._model = None
        self._trained = 0

    def train_on_example(self, example: Example) -> None:
        if example.label_missing:
            return

        X = example.features.reshape(1, -1)
        y = np.array([example.y])

        if self._model is None:
            self._model = SGDClassifier(**self.model_params)
            self._model.partial_fit(X, y, classes=self._require_classes())
        else:
            # Incremental update
            self._model.partial_fit(X, y)

        self._trained += 1

    def predict_votes(self, example: Example) -> List[float]:
        num_classes = len(self._require_classes())

        if self._model is None:
            return [0.0] * num_classes

        X = example.features.reshape(1, -1)

        if hasattr(self._model, "predict_proba"):
            return [float(p) for p in self._model.predict_proba(X)[0]]

        votes = [0.0] * num_classes
        votes[int(self._model.predict(X)[0])] = 1.0
        return votes

    def model_measurements(self) -> List[Measurement]:
        norm = (
            float(np.linalg.norm(self._model.coef_))
            if self._model is not None
            else 0.0
        )
        return [
            Measurement("model training instances", float(self._trained)),
            Measurement("model coefficient norm", norm),
        ]

    def _require_classes(self) -> np.ndarray:
        if self._classes is None:
            raise RuntimeError(
                "[SGDClassifierLearner] set_context() must be called first"
            )
        return self._classes
