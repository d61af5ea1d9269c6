#!filepath: tests/reports/test_learning_curve_report.py
import pytest

from heldout.core.types import Measurement
from heldout.evaluation.curve import LearningCurve, LearningEvaluation
from heldout.reports.learning_curve import LearningCurveReport


def _curve():
    curve = LearningCurve()
    for n, acc in ((100, 60.0), (200, 72.5), (300, 80.0)):
        curve.insert_entry(
            LearningEvaluation.of(
                [
                    Measurement("evaluation instances", n),
                    Measurement("classifications correct (percent)", acc),
                ]
            )
        )
    return curve


def test_report_writes_png(tmp_path):
    out = tmp_path / "curve.png"

    LearningCurveReport(out).render(_curve())

    assert out.exists()
    assert out.stat().st_size > 0


def test_report_unknown_measurement(tmp_path):
    with pytest.raises(KeyError):
        LearningCurveReport(tmp_path / "x.png", "Kappa Statistic (percent)").render(_curve())


def test_report_empty_curve_writes_nothing(tmp_path):
    out = tmp_path / "empty.png"

    LearningCurveReport(out).render(LearningCurve())

    assert not out.exists()
