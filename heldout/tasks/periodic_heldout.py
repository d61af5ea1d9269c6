# heldout/tasks/periodic_heldout.py
from __future__ import annotations

from contextlib import ExitStack
from typing import Optional

from heldout import logs
from heldout.config.task_config import HeldOutConfig
from heldout.core.interfaces import (
    ExampleStream,
    Learner,
    PerformanceEvaluator,
    TaskMonitor,
)
from heldout.evaluation.curve import LearningCurve
from heldout.evaluation.predictions import PredictionWriter, resolve_ensemble_size
from heldout.evaluation.recorder import MetricsRecorder
from heldout.observability.monitor import NullMonitor
from heldout.tasks.scheduler import PeriodicHeldOutScheduler
from heldout.tasks.state import RunBudgets
from heldout.tasks.test_set import prepare_test_source
from heldout.utils.errors import TaskAborted
from heldout.utils.filesystem import FileSystem


class EvaluatePeriodicHeldOutTest:
    """
    Evaluates a learner on a stream by periodically testing on a held-out set.

    Lifecycle of run():
        1. open dump / prediction files (fatal if not writable)
        2. learner.set_context(stream header)
        3. prepare test source (cached holdout drains the stream first)
        4. scheduler loop
        5. close files (completion, abort or error)

    Returns the LearningCurve, or None when the monitor aborted.
    Collaborator exceptions propagate unchanged.
    """

    def __init__(
        self,
        cfg: HeldOutConfig,
        *,
        learner: Learner,
        stream: ExampleStream,
        evaluator: PerformanceEvaluator,
        run_name: str = "periodic-heldout",
    ):
        self.cfg = cfg
        self.learner = learner
        self.stream = stream
        self.evaluator = evaluator
        self.run_name = run_name

    def budgets(self) -> RunBudgets:
        cfg = self.cfg
        return RunBudgets(
            test_size=cfg.test_size,
            train_size=cfg.train_size,
            train_time=float(cfg.train_time),
            sample_frequency=cfg.sample_frequency,
            pretrain_size=cfg.pretrain_size,
            cache_test=cfg.cache_test,
        )

    def run(self, monitor: Optional[TaskMonitor] = None) -> Optional[LearningCurve]:
        cfg = self.cfg
        monitor = monitor if monitor is not None else NullMonitor()

        with ExitStack() as outputs:
            dump_stream = None
            if cfg.dump_file is not None:
                dump_stream = outputs.enter_context(
                    FileSystem.open_append(cfg.dump_file, purpose="immediate result")
                )

            prediction_writer = None
            if cfg.output_prediction_file is not None:
                prediction_stream = outputs.enter_context(
                    FileSystem.open_append(
                        cfg.output_prediction_file, purpose="prediction result"
                    )
                )
                prediction_writer = PredictionWriter(
                    prediction_stream,
                    estimators=resolve_ensemble_size(
                        cfg.prediction_ensemble_size, cfg.output_prediction_file
                    ),
                )

            self.learner.set_context(self.stream.header())

            try:
                test_source = prepare_test_source(
                    self.stream,
                    cfg.test_size,
                    cache=cfg.cache_test,
                    monitor=monitor,
                    poll_interval=cfg.monitor_interval,
                )
            except TaskAborted as ex:
                logs.warning(f"[{self.run_name}] ABORTED: {ex}")
                return None

            scheduler = PeriodicHeldOutScheduler(
                learner=self.learner,
                stream=self.stream,
                test_source=test_source,
                evaluator=self.evaluator,
                recorder=MetricsRecorder(
                    LearningCurve("evaluation instances"), dump_stream
                ),
                budgets=self.budgets(),
                monitor=monitor,
                prediction_writer=prediction_writer,
                clock=cfg.clock,
                poll_interval=cfg.monitor_interval,
                run_name=self.run_name,
            )
            return scheduler.run()
