#!filepath: heldout/core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from heldout.core.types import Example, Measurement, StreamHeader


class ExampleStream(ABC):
    """
    Lazy, possibly infinite source of Examples.

    restart() is only meaningful for materialized streams; a caller that
    replays a stream checks is_restartable() before relying on restart().
    """

    @abstractmethod
    def header(self) -> StreamHeader:
        ...

    @abstractmethod
    def has_more(self) -> bool:
        ...

    @abstractmethod
    def next_example(self) -> Example:
        ...

    def is_restartable(self) -> bool:
        return False

    def restart(self) -> None:
        raise NotImplementedError(
            f"[{self.__class__.__name__}] stream cannot be restarted"
        )


class Learner(ABC):
    """
    Online learner contract.

    Owns its model state; mutated only through these entry points.
    """

    @abstractmethod
    def set_context(self, header: StreamHeader) -> None:
        """Bind the stream schema before the first example."""

    @abstractmethod
    def train_on_example(self, example: Example) -> None:
        ...

    @abstractmethod
    def predict_votes(self, example: Example) -> List[float]:
        """
        Raw score vector, one component per class.
        Not necessarily normalized.
        """

    @abstractmethod
    def model_measurements(self) -> List[Measurement]:
        """Ordered; same names in the same order on every call."""


class PerformanceEvaluator(ABC):
    """
    Accumulates (example, votes) pairs into performance statistics.
    """

    @abstractmethod
    def reset(self) -> None:
        ...

    @abstractmethod
    def add_result(self, example: Example, votes: Sequence[float]) -> None:
        ...

    @abstractmethod
    def performance_measurements(self) -> List[Measurement]:
        """Ordered; same names in the same order on every call."""


class TaskMonitor(ABC):
    """
    Cooperative progress / cancellation surface.

    The run polls it at fixed example-count intervals; an
    implementation may be driven from another thread.
    fraction == -1.0 means indeterminate.
    """

    @abstractmethod
    def set_activity(self, description: str, fraction: float = -1.0) -> None:
        ...

    @abstractmethod
    def set_activity_description(self, description: str) -> None:
        ...

    @abstractmethod
    def set_fraction_complete(self, fraction: float) -> None:
        ...

    @abstractmethod
    def should_abort(self) -> bool:
        ...

    @abstractmethod
    def result_preview_requested(self) -> bool:
        ...

    @abstractmethod
    def publish_preview(self, preview: Any) -> None:
        ...
