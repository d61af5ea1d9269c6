#!filepath: tests/evaluation/test_recorder.py
import io
import math

from heldout.evaluation.curve import LearningCurve
from heldout.evaluation.recorder import MetricsRecorder, rate
from heldout.tasks.state import SchedulerState


def test_rate_ieee_semantics():
    assert rate(100, 2.0) == 50.0
    assert rate(10, 0.0) == float("inf")
    assert math.isnan(rate(0, 0.0))


def _state():
    return SchedulerState(
        instances_processed=200,
        total_train_time=4.0,
        last_train_time=2.0,
        last_train_instances=100,
        test_time=0.5,
        test_instances=50,
    )


def test_snapshot_fixed_measurements_come_first(recording_evaluator, recording_learner):
    recorder = MetricsRecorder(LearningCurve())

    snap = recorder.snapshot(_state(), recording_evaluator(), recording_learner())

    assert snap.names == (
        "evaluation instances",
        "total train time",
        "total train speed",
        "last train time",
        "last train speed",
        "test time",
        "test speed",
        "tested",
        "first tested",
        "model trained",
    )
    assert snap.values[:7] == (200.0, 4.0, 50.0, 2.0, 50.0, 0.5, 100.0)


def test_append_without_dump_only_updates_curve(recording_evaluator, recording_learner):
    curve = LearningCurve()
    recorder = MetricsRecorder(curve)

    recorder.append(recorder.snapshot(_state(), recording_evaluator(), recording_learner()))

    assert curve.num_entries() == 1


def test_dump_header_written_once(recording_evaluator, recording_learner):
    buf = io.StringIO()
    recorder = MetricsRecorder(LearningCurve(), buf)
    evaluator, learner = recording_evaluator(), recording_learner()

    recorder.append(recorder.snapshot(_state(), evaluator, learner))
    recorder.append(recorder.snapshot(_state(), evaluator, learner))

    lines = buf.getvalue().splitlines()
    assert len(lines) == 3
    assert lines[0].split(",")[:2] == ["evaluation instances", "total train time"]
    assert lines[1] == lines[2]
    assert lines[1].startswith("200.0,4.0,50.0,")
