# heldout/tasks/state.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    PRETRAIN = "PRETRAIN"
    TRAIN_CHUNK = "TRAIN_CHUNK"
    TEST_PASS = "TEST_PASS"
    RECORD = "RECORD"
    DONE = "DONE"


@dataclass(frozen=True)
class RunBudgets:
    """
    RunBudgets (FROZEN)

    train_size < 1 means unlimited.
    train_time is in seconds of the scheduler clock.
    """

    test_size: int
    train_size: int
    train_time: float
    sample_frequency: int
    pretrain_size: int
    cache_test: bool

    @property
    def train_size_unlimited(self) -> bool:
        return self.train_size < 1


@dataclass
class SchedulerState:
    """
    Running totals threaded through every phase transition.

    Owned by one scheduler run; the recorder only reads it.
    """

    phase: Phase = Phase.TRAIN_CHUNK
    pretrain_done: bool = True

    # training
    instances_processed: int = 0
    total_train_time: float = 0.0
    last_train_time: float = 0.0
    last_train_instances: int = 0

    # testing
    test_time: float = 0.0
    test_instances: int = 0

    # recording
    snapshots: int = 0
