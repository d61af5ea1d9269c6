# heldout/workflows/periodic_heldout.py
from __future__ import annotations

from typing import Any, Dict, Optional

from heldout import logs
from heldout.config.app_config import AppConfig
from heldout.config.task_config import HeldOutConfig
from heldout.core.interfaces import TaskMonitor
from heldout.evaluation.curve import LearningCurve
from heldout.registry import ComponentFactory
from heldout.tasks.periodic_heldout import EvaluatePeriodicHeldOutTest


def build_periodic_heldout(
    cfg: HeldOutConfig,
    run_name: str = "periodic-heldout",
) -> EvaluatePeriodicHeldOutTest:
    """
    Periodic Held-Out Workflow (FINAL)

    Components are resolved ONLY through ComponentFactory.
    """
    return EvaluatePeriodicHeldOutTest(
        cfg,
        learner=ComponentFactory.learner(cfg.learner.model_dump()),
        stream=ComponentFactory.stream(cfg.stream.model_dump()),
        evaluator=ComponentFactory.evaluator(cfg.evaluator.model_dump()),
        run_name=run_name,
    )


def apply_overrides(cfg: HeldOutConfig, overrides: Dict[str, Any]) -> HeldOutConfig:
    """
    Overrides with value None are ignored; the result is re-validated.
    """
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return cfg
    return HeldOutConfig.model_validate({**cfg.model_dump(), **update})


@logs.catch(msg="periodic held-out run failed")
def run_periodic_heldout(
    app_cfg: AppConfig,
    *,
    monitor: Optional[TaskMonitor] = None,
    run_name: str = "periodic-heldout",
) -> Optional[LearningCurve]:
    task = build_periodic_heldout(app_cfg.task, run_name=run_name)
    return task.run(monitor)
