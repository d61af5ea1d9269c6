# heldout/streams/hyperplane.py
from __future__ import annotations

from typing import Optional

import numpy as np

from heldout.core.interfaces import ExampleStream
from heldout.core.types import Example, StreamHeader
from heldout.utils.errors import StreamExhaustedError


class HyperplaneGenerator(ExampleStream):
    """
    Rotating hyperplane stream (binary classification).

    Semantics:
    - x ~ U[0, 1)^d
    - class 1 iff sum(w * x) >= sum(w) / 2
    - noise_percentage of labels are flipped
    - every example each weight moves by drift_magnitude * direction;
      each direction reverses with probability sigma_percentage / 100

    drift_magnitude == 0 gives a stationary stream.
    max_examples None gives an infinite stream.
    restart() re-seeds, so the sequence is reproducible.
    """

    def __init__(
        self,
        *,
        num_features: int = 10,
        drift_magnitude: float = 0.0,
        noise_percentage: float = 5.0,
        sigma_percentage: float = 10.0,
        seed: int = 1,
        max_examples: Optional[int] = None,
    ):
        if num_features < 1:
            raise ValueError("[HyperplaneGenerator] num_features must be >= 1")
        if not 0.0 <= noise_percentage <= 100.0:
            raise ValueError("[HyperplaneGenerator] noise_percentage out of [0, 100]")

        self.num_features = num_features
        self.drift_magnitude = drift_magnitude
        self.noise_percentage = noise_percentage
        self.sigma_percentage = sigma_percentage
        self.seed = seed
        self.max_examples = max_examples

        self._header = StreamHeader(
            feature_names=tuple(f"att{i + 1}" for i in range(num_features)),
            class_labels=("class1", "class2"),
        )
        self.restart()

    def header(self) -> StreamHeader:
        return self._header

    def has_more(self) -> bool:
        return self.max_examples is None or self._produced < self.max_examples

    def next_example(self) -> Example:
        if not self.has_more():
            raise StreamExhaustedError("[HyperplaneGenerator] max_examples reached")

        rng = self._rng
        x = rng.random(self.num_features)

        total = float(np.dot(self._weights, x))
        y = 1 if total >= self._weights.sum() / 2.0 else 0

        if rng.random() * 100.0 < self.noise_percentage:
            y = 1 - y

        if self.drift_magnitude != 0.0:
            self._drift()

        self._produced += 1
        return Example(x=tuple(float(v) for v in x), y=y)

    def is_restartable(self) -> bool:
        return True

    def restart(self) -> None:
        self._rng = np.random.default_rng(self.seed)
        self._weights = self._rng.random(self.num_features)
        self._direction = np.ones(self.num_features)
        self._produced = 0

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _drift(self) -> None:
        self._weights += self._direction * self.drift_magnitude
        flip = self._rng.random(self.num_features) * 100.0 < self.sigma_percentage
        self._direction[flip] *= -1.0
