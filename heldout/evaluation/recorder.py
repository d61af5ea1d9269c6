# heldout/evaluation/recorder.py
from __future__ import annotations

from typing import List, Optional, TextIO

from heldout import logs
from heldout.core.interfaces import Learner, PerformanceEvaluator
from heldout.core.types import Measurement
from heldout.evaluation.curve import LearningCurve, LearningEvaluation
from heldout.tasks.state import SchedulerState


def rate(count: float, seconds: float) -> float:
    """
    count / seconds with IEEE semantics for a zero duration:
    x / 0 -> inf, 0 / 0 -> nan
    """
    if seconds == 0.0:
        return float("nan") if count == 0 else float("inf")
    return count / seconds


class MetricsRecorder:
    """
    MetricsRecorder (FINAL)

    Snapshot schema (FROZEN, in this order):
        evaluation instances
        total train time
        total train speed
        last train time
        last train speed
        test time
        test speed
        <evaluator measurements, in evaluator order>
        <learner measurements, in learner order>

    Changing this order after the first snapshot breaks every
    previously written dump file.
    """

    def __init__(self, curve: LearningCurve, dump_stream: Optional[TextIO] = None):
        self.curve = curve
        self._dump = dump_stream
        self._first_dump = True

    def snapshot(
        self,
        state: SchedulerState,
        evaluator: PerformanceEvaluator,
        learner: Learner,
    ) -> LearningEvaluation:
        measurements: List[Measurement] = [
            Measurement(self.curve.ordering_measurement_name,
                        float(state.instances_processed)),
            Measurement("total train time", state.total_train_time),
            Measurement("total train speed",
                        rate(state.instances_processed, state.total_train_time)),
            Measurement("last train time", state.last_train_time),
            # examples actually trained, not sample_frequency; the two differ
            # on a last chunk capped by train_size
            Measurement("last train speed",
                        rate(state.last_train_instances, state.last_train_time)),
            Measurement("test time", state.test_time),
            Measurement("test speed", rate(state.test_instances, state.test_time)),
        ]
        measurements.extend(evaluator.performance_measurements())
        measurements.extend(learner.model_measurements())

        return LearningEvaluation.of(measurements)

    def append(self, snapshot: LearningEvaluation) -> None:
        self.curve.insert_entry(snapshot)

        if self._dump is None:
            return

        if self._first_dump:
            self._dump.write(self.curve.header_to_string() + "\n")
            self._first_dump = False

        self._dump.write(self.curve.entry_to_string(self.curve.num_entries() - 1) + "\n")
        self._dump.flush()

        logs.debug(
            f"[MetricsRecorder] dumped entry {self.curve.num_entries()}"
        )
