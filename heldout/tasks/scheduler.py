# heldout/tasks/scheduler.py
from __future__ import annotations

from collections import OrderedDict
from typing import Callable, Dict, Optional

from heldout import logs
from heldout.core.interfaces import (
    ExampleStream,
    Learner,
    PerformanceEvaluator,
    TaskMonitor,
)
from heldout.evaluation.curve import LearningCurve
from heldout.evaluation.predictions import PredictionWriter
from heldout.evaluation.recorder import MetricsRecorder
from heldout.observability.monitor import NullMonitor
from heldout.observability.timeline_reporter import TimelineReporter
from heldout.observability.timer import Clock, Timer
from heldout.tasks.state import Phase, RunBudgets, SchedulerState
from heldout.utils.errors import EvaluationConfigError, TaskAborted


class PeriodicHeldOutScheduler:
    """
    PeriodicHeldOutScheduler (FINAL)

    Phases:
        PRETRAIN     one burst of pretrain_size examples, once
        TRAIN_CHUNK  up to sample_frequency examples (capped by train_size)
        TEST_PASS    test_size examples from the test source
        RECORD       snapshot -> curve (+ dump file, + preview)
        DONE         terminal

    Transition rules:
    - a training phase is entered only while
      (train_size unlimited or not reached) and the primary stream has more
    - total train time > train_time after a training phase -> DONE,
      the chunk is kept but never tested / recorded
    - every test example requires the PRIMARY stream to still have more;
      a pass cut short is dropped (no snapshot) -> DONE
    - monitor abort at any poll -> run() returns None, curve untouched
      since the last completed RECORD

    Single task: learner, streams and evaluator are never touched
    concurrently. The monitor is polled every poll_interval examples.
    """

    def __init__(
        self,
        *,
        learner: Learner,
        stream: ExampleStream,
        test_source: ExampleStream,
        evaluator: PerformanceEvaluator,
        recorder: MetricsRecorder,
        budgets: RunBudgets,
        monitor: Optional[TaskMonitor] = None,
        prediction_writer: Optional[PredictionWriter] = None,
        clock: Clock = "cpu",
        poll_interval: int = 10,
        run_name: str = "periodic-heldout",
    ):
        self.learner = learner
        self.stream = stream
        self.test_source = test_source
        self.evaluator = evaluator
        self.recorder = recorder
        self.budgets = budgets
        self.monitor = monitor if monitor is not None else NullMonitor()
        self.prediction_writer = prediction_writer
        self.poll_interval = poll_interval
        self.run_name = run_name

        if budgets.cache_test and not test_source.is_restartable():
            raise EvaluationConfigError(
                f"[Scheduler] cached test source {type(test_source).__name__} "
                f"cannot be restarted"
            )

        self._timer = Timer(clock=clock)
        self.state = SchedulerState(pretrain_done=budgets.pretrain_size <= 0)
        self.timeline: Dict[str, float] = OrderedDict(
            (name, 0.0) for name in ("pretrain", "train", "test", "record")
        )

        self._handlers: Dict[Phase, Callable[[], Phase]] = {
            Phase.PRETRAIN: self._pretrain,
            Phase.TRAIN_CHUNK: self._train_chunk,
            Phase.TEST_PASS: self._test_pass,
            Phase.RECORD: self._record,
        }

    @property
    def curve(self) -> LearningCurve:
        return self.recorder.curve

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(self) -> Optional[LearningCurve]:
        """
        Returns the learning curve, or None when the monitor aborted.
        """
        state = self.state
        logs.info(f"[Scheduler] START {self.run_name} budgets={self.budgets}")

        try:
            state.phase = self._next_training_phase()
            while state.phase is not Phase.DONE:
                state.phase = self._handlers[state.phase]()
        except TaskAborted as ex:
            state.phase = Phase.DONE
            logs.warning(
                f"[Scheduler] ABORTED {self.run_name}: {ex} "
                f"(processed={state.instances_processed}, "
                f"snapshots={state.snapshots})"
            )
            return None

        TimelineReporter(self.timeline, self.run_name).print()
        logs.info(
            f"[Scheduler] DONE processed={state.instances_processed} "
            f"snapshots={state.snapshots} "
            f"train_time={state.total_train_time:.3f}s"
        )
        return self.curve

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _pretrain(self) -> Phase:
        self.monitor.set_activity_description("Pre-training...")
        self._train(
            self.budgets.pretrain_size, timeline_key="pretrain", capped=False
        )
        self.state.pretrain_done = True

        if self._train_time_exceeded():
            return Phase.DONE
        return self._next_training_phase()

    def _train_chunk(self) -> Phase:
        self.monitor.set_activity_description("Training...")
        self._train(self.budgets.sample_frequency, timeline_key="train")

        if self._train_time_exceeded():
            return Phase.DONE
        return Phase.TEST_PASS

    def _test_pass(self) -> Phase:
        state = self.state
        budgets = self.budgets

        if budgets.cache_test:
            self.test_source.restart()
        self.evaluator.reset()

        self.monitor.set_activity_description(self._testing_description())

        self._timer.start("test")
        tested = 0
        while tested < budgets.test_size:
            # guard on the primary stream, also in cached mode
            if not self.stream.has_more():
                break

            example = self.test_source.next_example()
            votes = self.learner.predict_votes(example)

            if self.prediction_writer is not None:
                self.prediction_writer.emit(example, votes)

            self.evaluator.add_result(example, votes)
            tested += 1

            if tested % self.poll_interval == 0:
                self._poll(tested / budgets.test_size)

        elapsed = self._timer.end("test")
        self.timeline["test"] += elapsed

        if tested != budgets.test_size:
            logs.info(
                f"[Scheduler] test pass truncated at {tested}/"
                f"{budgets.test_size}, primary stream exhausted -> dropped"
            )
            return Phase.DONE

        state.test_time = elapsed
        state.test_instances = tested
        return Phase.RECORD

    def _record(self) -> Phase:
        state = self.state

        self._timer.start("record")
        snapshot = self.recorder.snapshot(state, self.evaluator, self.learner)
        self.recorder.append(snapshot)
        self.timeline["record"] += self._timer.end("record")

        state.snapshots += 1
        logs.info(
            f"[Scheduler] checkpoint {state.snapshots} "
            f"at {state.instances_processed} training examples"
        )

        if self.monitor.result_preview_requested():
            self.monitor.publish_preview(self.curve.copy())

        return self._next_training_phase()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _next_training_phase(self) -> Phase:
        if not self._can_train():
            return Phase.DONE
        if not self.state.pretrain_done:
            return Phase.PRETRAIN
        return Phase.TRAIN_CHUNK

    def _can_train(self) -> bool:
        budgets = self.budgets
        under_budget = (
            budgets.train_size_unlimited
            or self.state.instances_processed < budgets.train_size
        )
        return under_budget and self.stream.has_more()

    def _train(self, burst: int, *, timeline_key: str, capped: bool = True) -> None:
        """
        Train on up to `burst` examples. Training chunks (capped=True) stop at
        train_size; the pretrain burst is bounded only by the stream.
        """
        state = self.state
        budgets = self.budgets

        target = state.instances_processed + burst
        if capped and not budgets.train_size_unlimited:
            target = min(target, budgets.train_size)

        start_count = state.instances_processed
        self._timer.start(timeline_key)

        while state.instances_processed < target and self.stream.has_more():
            self.learner.train_on_example(self.stream.next_example())
            state.instances_processed += 1

            if state.instances_processed % self.poll_interval == 0:
                self._poll(self._training_fraction())

        elapsed = self._timer.end(timeline_key)

        state.last_train_time = elapsed
        state.last_train_instances = state.instances_processed - start_count
        state.total_train_time += elapsed
        self.timeline[timeline_key] += elapsed

    def _train_time_exceeded(self) -> bool:
        if self.state.total_train_time > self.budgets.train_time:
            logs.info(
                f"[Scheduler] train time budget exceeded: "
                f"{self.state.total_train_time:.3f}s > {self.budgets.train_time}s"
            )
            return True
        return False

    def _poll(self, fraction: float) -> None:
        if self.monitor.should_abort():
            raise TaskAborted(f"abort requested during {self.state.phase.value}")
        self.monitor.set_fraction_complete(fraction)

    def _training_fraction(self) -> float:
        if self.budgets.train_size_unlimited:
            return -1.0
        return self.state.instances_processed / self.budgets.train_size

    def _testing_description(self) -> str:
        if self.budgets.train_size_unlimited:
            return (
                f"Testing (after {self.state.instances_processed} "
                f"training examples)..."
            )
        pct = self._training_fraction() * 100.0
        return f"Testing (after {pct:.2f}% training)..."
