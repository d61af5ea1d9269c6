# heldout/reports/base.py
from __future__ import annotations

from abc import ABC, abstractmethod

from heldout.evaluation.curve import LearningCurve


class Report(ABC):
    """
    Report (FINAL)

    LearningCurve -> side effects (files, figures)

    Reports are read-only consumers of a finished curve.
    Deleting a report never changes what the run recorded.
    """

    @abstractmethod
    def render(self, curve: LearningCurve) -> None:
        ...
