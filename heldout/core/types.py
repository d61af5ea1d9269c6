# heldout/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class StreamHeader:
    """
    Stream schema: feature names + class labels (index == class value).
    """

    feature_names: Tuple[str, ...]
    class_labels: Tuple[str, ...]

    @property
    def num_features(self) -> int:
        return len(self.feature_names)

    @property
    def num_classes(self) -> int:
        return len(self.class_labels)


@dataclass(frozen=True)
class Example:
    """
    Example (FROZEN)

    x : feature values
    y : class index, None == label missing
    """

    x: Tuple[float, ...]
    y: Optional[int] = None

    @property
    def label_missing(self) -> bool:
        return self.y is None

    @property
    def features(self) -> np.ndarray:
        """Fresh float array; callers may modify it freely."""
        return np.asarray(self.x, dtype=float)


@dataclass(frozen=True)
class Measurement:
    name: str
    value: float
