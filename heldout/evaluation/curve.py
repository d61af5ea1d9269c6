# heldout/evaluation/curve.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import pandas as pd

from heldout.core.types import Measurement


@dataclass(frozen=True)
class LearningEvaluation:
    """
    LearningEvaluation (FROZEN)

    One snapshot == the ordered measurements taken at one checkpoint.
    """

    measurements: Tuple[Measurement, ...]

    @classmethod
    def of(cls, measurements: Sequence[Measurement]) -> "LearningEvaluation":
        return cls(measurements=tuple(measurements))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(m.name for m in self.measurements)

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(float(m.value) for m in self.measurements)

    def get(self, name: str) -> float:
        for m in self.measurements:
            if m.name == name:
                return float(m.value)
        raise KeyError(f"[LearningEvaluation] no measurement named {name!r}")


class LearningCurve:
    """
    LearningCurve (FINAL)

    Append-only, time-ordered snapshots.

    Schema rule:
    - the first entry fixes the ordered measurement names
    - every later entry must carry the same names in the same order;
      a mismatch is a collaborator bug and raises ValueError
    """

    def __init__(self, ordering_measurement_name: str = "evaluation instances"):
        self.ordering_measurement_name = ordering_measurement_name
        self._names: Tuple[str, ...] = ()
        self._entries: List[LearningEvaluation] = []

    # --------------------------------------------------
    # write side
    # --------------------------------------------------
    def insert_entry(self, entry: LearningEvaluation) -> None:
        if not self._entries:
            self._names = entry.names
        elif entry.names != self._names:
            raise ValueError(
                "[LearningCurve] measurement schema changed: "
                f"expected {list(self._names)}, got {list(entry.names)}"
            )
        self._entries.append(entry)

    # --------------------------------------------------
    # read side
    # --------------------------------------------------
    def num_entries(self) -> int:
        return len(self._entries)

    def entry(self, index: int) -> LearningEvaluation:
        return self._entries[index]

    def measurement_names(self) -> Tuple[str, ...]:
        return self._names

    def header_to_string(self) -> str:
        return ",".join(self._names)

    def entry_to_string(self, index: int) -> str:
        return ",".join(repr(v) for v in self._entries[index].values)

    def copy(self) -> "LearningCurve":
        clone = LearningCurve(self.ordering_measurement_name)
        clone._names = self._names
        clone._entries = list(self._entries)
        return clone

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [e.values for e in self._entries],
            columns=list(self._names),
        )

    def __len__(self) -> int:
        return len(self._entries)
