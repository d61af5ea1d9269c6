# tests/conftest.py
from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

import pytest
from loguru import logger

from heldout.core.interfaces import (
    ExampleStream,
    Learner,
    PerformanceEvaluator,
    TaskMonitor,
)
from heldout.core.types import Example, Measurement, StreamHeader
from heldout.evaluation.curve import LearningCurve
from heldout.evaluation.recorder import MetricsRecorder
from heldout.tasks.scheduler import PeriodicHeldOutScheduler
from heldout.tasks.state import RunBudgets
from heldout.tasks.test_set import prepare_test_source


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


# ============================================================
# Fakes (module-level, shared through fixtures below)
# ============================================================
class SequenceStream(ExampleStream):
    """
    Finite stream; example i has x == (i,) and y == i % 2.
    The sequence number makes train / test overlap checkable.
    """

    def __init__(self, n: int):
        self.n = n
        self.pos = 0
        self._header = StreamHeader(feature_names=("seq",), class_labels=("c0", "c1"))

    def header(self) -> StreamHeader:
        return self._header

    def has_more(self) -> bool:
        return self.pos < self.n

    def next_example(self) -> Example:
        example = Example(x=(float(self.pos),), y=self.pos % 2)
        self.pos += 1
        return example


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class RecordingLearner(Learner):
    """Remembers the sequence number of every trained / predicted example."""

    def __init__(
        self,
        votes: Sequence[float] = (0.25, 0.75),
        clock: Optional[FakeClock] = None,
        seconds_per_example: float = 0.0,
    ):
        self.votes = list(votes)
        self.clock = clock
        self.seconds_per_example = seconds_per_example
        self.header: Optional[StreamHeader] = None
        self.trained: List[int] = []
        self.predicted: List[int] = []

    def set_context(self, header: StreamHeader) -> None:
        self.header = header

    def train_on_example(self, example: Example) -> None:
        self.trained.append(int(example.x[0]))
        if self.clock is not None:
            self.clock.now += self.seconds_per_example

    def predict_votes(self, example: Example) -> List[float]:
        self.predicted.append(int(example.x[0]))
        return list(self.votes)

    def model_measurements(self) -> List[Measurement]:
        return [Measurement("model trained", float(len(self.trained)))]


class RecordingEvaluator(PerformanceEvaluator):
    def __init__(self):
        self.resets = 0
        self.results: List[int] = []

    def reset(self) -> None:
        self.resets += 1
        self.results = []

    def add_result(self, example: Example, votes: Sequence[float]) -> None:
        self.results.append(int(example.x[0]))

    def performance_measurements(self) -> List[Measurement]:
        return [
            Measurement("tested", float(len(self.results))),
            Measurement("first tested", float(self.results[0]) if self.results else -1.0),
        ]


class ScriptedMonitor(TaskMonitor):
    """
    Aborts once the activity starting with `abort_on` has been
    entered more than `after` times.
    """

    def __init__(
        self,
        abort_on: Optional[str] = None,
        after: int = 0,
        preview: bool = False,
    ):
        self.abort_on = abort_on
        self.after = after
        self.preview = preview
        self.activities: List[str] = []
        self.fractions: List[float] = []
        self.previews: List[Any] = []

    def set_activity(self, description: str, fraction: float = -1.0) -> None:
        self.set_activity_description(description)
        self.set_fraction_complete(fraction)

    def set_activity_description(self, description: str) -> None:
        self.activities.append(description)

    def set_fraction_complete(self, fraction: float) -> None:
        self.fractions.append(fraction)

    def should_abort(self) -> bool:
        if self.abort_on is None:
            return False
        entered = [a for a in self.activities if a.startswith(self.abort_on)]
        return len(entered) > self.after

    def result_preview_requested(self) -> bool:
        return self.preview

    def publish_preview(self, preview: Any) -> None:
        self.previews.append(preview)


# ============================================================
# Fixtures
# ============================================================
@pytest.fixture
def sequence_stream() -> Callable[[int], SequenceStream]:
    return SequenceStream


@pytest.fixture
def recording_learner() -> Callable[..., RecordingLearner]:
    return RecordingLearner


@pytest.fixture
def recording_evaluator() -> Callable[[], RecordingEvaluator]:
    return RecordingEvaluator


@pytest.fixture
def scripted_monitor() -> Callable[..., ScriptedMonitor]:
    return ScriptedMonitor


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:
    """
    Replaces the "wall" clock used by Timer; schedulers built with
    clock="wall" after this fixture read FakeClock.now.
    """
    import heldout.observability.timer as timer_module

    clock = FakeClock()
    monkeypatch.setitem(timer_module._CLOCKS, "wall", clock)
    return clock


@pytest.fixture
def make_scheduler():
    """
    Factory fixture for a scheduler over a SequenceStream.

    Usage:
        sched = make_scheduler(n=100, test_size=10, sample_frequency=20)
        curve = sched.run()
        sched.learner.trained, sched.learner.predicted ...
    """

    def _make(
        *,
        n: int,
        test_size: int,
        sample_frequency: int,
        cache_test: bool = True,
        train_size: int = 0,
        train_time: float = 3600.0,
        pretrain_size: int = 0,
        learner: Optional[Learner] = None,
        monitor: Optional[TaskMonitor] = None,
        prediction_writer=None,
        dump_stream=None,
        clock: str = "cpu",
        poll_interval: int = 10,
    ) -> PeriodicHeldOutScheduler:
        stream = SequenceStream(n)
        learner = learner if learner is not None else RecordingLearner()
        monitor = monitor if monitor is not None else ScriptedMonitor()
        learner.set_context(stream.header())

        test_source = prepare_test_source(
            stream,
            test_size,
            cache=cache_test,
            monitor=monitor,
            poll_interval=poll_interval,
        )

        return PeriodicHeldOutScheduler(
            learner=learner,
            stream=stream,
            test_source=test_source,
            evaluator=RecordingEvaluator(),
            recorder=MetricsRecorder(LearningCurve(), dump_stream),
            budgets=RunBudgets(
                test_size=test_size,
                train_size=train_size,
                train_time=train_time,
                sample_frequency=sample_frequency,
                pretrain_size=pretrain_size,
                cache_test=cache_test,
            ),
            monitor=monitor,
            prediction_writer=prediction_writer,
            clock=clock,
            poll_interval=poll_interval,
        )

    return _make
