#!filepath: heldout/observability/progress.py
from heldout import logs


class ProgressReporter:
    """
    Log-only progress lines (no Rich / TQDM, safe under pytest and CI)
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def start(self, task: str, total: int | None = None, unit: str = ""):
        if not self.enabled:
            return
        total_str = "?" if total is None else str(total)
        logs.info(f"[Progress] {task} started total={total_str} {unit}")

    def update(self, task: str, fraction: float):
        if not self.enabled:
            return
        if fraction < 0:
            logs.debug(f"[Progress] {task}: running")
            return
        logs.debug(f"[Progress] {task}: {fraction * 100.0:.2f}%")

    def done(self, task: str):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} done")
