#!filepath: heldout/observability/monitor.py
from __future__ import annotations

import threading
from typing import Any, Optional

from heldout.core.interfaces import TaskMonitor
from heldout.observability.progress import ProgressReporter


class NullMonitor(TaskMonitor):
    """Monitor that never aborts and never asks for previews."""

    def set_activity(self, description: str, fraction: float = -1.0) -> None:
        pass

    def set_activity_description(self, description: str) -> None:
        pass

    def set_fraction_complete(self, fraction: float) -> None:
        pass

    def should_abort(self) -> bool:
        return False

    def result_preview_requested(self) -> bool:
        return False

    def publish_preview(self, preview: Any) -> None:
        pass


class StandardTaskMonitor(TaskMonitor):
    """
    StandardTaskMonitor (FINAL)

    Bridge between a running task and the outside world.

    - The running task calls set_* / should_abort / publish_preview.
    - Any other thread (signal handler, UI, API) calls request_abort,
      request_result_preview and latest_result_preview.
    - Activity changes are reported through ProgressReporter: the
      previous activity is marked done, the new one started.

    A preview request is one-shot: it is cleared once the task publishes.
    """

    def __init__(self, progress: ProgressReporter | None = None):
        self._progress = progress if progress is not None else ProgressReporter()
        self._lock = threading.Lock()
        self._abort = threading.Event()
        self._preview_requested = False
        self._latest_preview: Optional[Any] = None

        self.activity: str = ""
        self.fraction: float = -1.0

    # --------------------------------------------------
    # task side
    # --------------------------------------------------
    def set_activity(self, description: str, fraction: float = -1.0) -> None:
        self.set_activity_description(description)
        self.set_fraction_complete(fraction)

    def set_activity_description(self, description: str) -> None:
        with self._lock:
            previous = self.activity
            self.activity = description
        if description != previous:
            if previous:
                self._progress.done(previous)
            self._progress.start(description)

    def set_fraction_complete(self, fraction: float) -> None:
        with self._lock:
            self.fraction = fraction
            activity = self.activity
        self._progress.update(activity, fraction)

    def should_abort(self) -> bool:
        return self._abort.is_set()

    def result_preview_requested(self) -> bool:
        with self._lock:
            return self._preview_requested

    def publish_preview(self, preview: Any) -> None:
        with self._lock:
            self._latest_preview = preview
            self._preview_requested = False

    # --------------------------------------------------
    # controller side
    # --------------------------------------------------
    def request_abort(self) -> None:
        self._abort.set()

    def request_result_preview(self) -> None:
        with self._lock:
            self._preview_requested = True

    def latest_result_preview(self) -> Optional[Any]:
        with self._lock:
            return self._latest_preview
