#!filepath: tests/evaluation/test_curve.py
import pytest

from heldout.core.types import Measurement
from heldout.evaluation.curve import LearningCurve, LearningEvaluation


def _entry(instances, accuracy):
    return LearningEvaluation.of(
        [
            Measurement("evaluation instances", instances),
            Measurement("accuracy", accuracy),
        ]
    )


def test_first_entry_fixes_schema():
    curve = LearningCurve()
    curve.insert_entry(_entry(100, 0.5))
    curve.insert_entry(_entry(200, 0.6))

    assert curve.num_entries() == 2
    assert len(curve) == 2
    assert curve.measurement_names() == ("evaluation instances", "accuracy")
    assert curve.header_to_string() == "evaluation instances,accuracy"
    assert curve.entry_to_string(1) == "200.0,0.6"


def test_schema_change_is_rejected():
    curve = LearningCurve()
    curve.insert_entry(_entry(100, 0.5))

    other = LearningEvaluation.of([Measurement("evaluation instances", 200)])

    with pytest.raises(ValueError, match="schema changed"):
        curve.insert_entry(other)
    assert curve.num_entries() == 1


def test_entry_lookup_by_name():
    entry = _entry(100, 0.5)

    assert entry.get("accuracy") == 0.5
    with pytest.raises(KeyError):
        entry.get("missing")


def test_copy_is_independent():
    curve = LearningCurve()
    curve.insert_entry(_entry(100, 0.5))

    snapshot = curve.copy()
    curve.insert_entry(_entry(200, 0.6))

    assert snapshot.num_entries() == 1
    assert snapshot.ordering_measurement_name == "evaluation instances"


def test_to_frame():
    curve = LearningCurve()
    curve.insert_entry(_entry(100, 0.5))
    curve.insert_entry(_entry(200, 0.75))

    df = curve.to_frame()

    assert list(df.columns) == ["evaluation instances", "accuracy"]
    assert df["accuracy"].tolist() == [0.5, 0.75]


def test_empty_curve():
    curve = LearningCurve()

    assert curve.num_entries() == 0
    assert curve.header_to_string() == ""
    assert curve.to_frame().empty
