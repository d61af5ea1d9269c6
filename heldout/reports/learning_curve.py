# heldout/reports/learning_curve.py
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from heldout import logs
from heldout.evaluation.curve import LearningCurve
from heldout.reports.base import Report


class LearningCurveReport(Report):
    def __init__(self, output_path, measurement: str = "classifications correct (percent)"):
        self._path = output_path
        self._measurement = measurement

    def render(self, curve: LearningCurve) -> None:
        if curve.num_entries() == 0:
            logs.warning("[LearningCurveReport] empty curve, nothing to plot")
            return

        df = curve.to_frame()
        if self._measurement not in df.columns:
            raise KeyError(
                f"[LearningCurveReport] unknown measurement: {self._measurement}"
            )

        x_name = curve.ordering_measurement_name

        plt.figure(figsize=(10, 4))
        plt.plot(df[x_name], df[self._measurement], marker="o")
        plt.title(f"Learning Curve: {self._measurement}")
        plt.xlabel(x_name)
        plt.ylabel(self._measurement)
        plt.tight_layout()
        plt.savefig(self._path)
        plt.close()

        logs.info(f"[LearningCurveReport] saved {self._path}")
