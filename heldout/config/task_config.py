# heldout/config/task_config.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field


class ComponentConfig(BaseModel):
    """
    Pluggable component reference, resolved by ComponentFactory.

    Example:
        {"type": "sgd", "params": {"loss": "log_loss"}}
    """

    type: str
    params: Dict[str, Any] = Field(default_factory=dict)


class HeldOutConfig(BaseModel):
    """
    HeldOutConfig (FINAL)

    One config == one periodic held-out run.
    Every budget is fixed for the lifetime of the run.
    """

    # components
    learner: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(type="sgd")
    )
    stream: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(type="hyperplane")
    )
    evaluator: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(type="basic_classification")
    )

    # budgets
    test_size: int = Field(1_000_000, ge=0)
    train_size: int = Field(0, ge=0)  # < 1 = unlimited
    train_time: int = Field(10 * 60 * 60, ge=0)  # seconds
    sample_frequency: int = Field(100_000, ge=1)
    pretrain_size: int = Field(0, ge=0)

    # test set
    cache_test: bool = False

    # outputs
    dump_file: Optional[Path] = None
    output_prediction_file: Optional[Path] = None
    prediction_ensemble_size: Optional[int] = Field(None, ge=0)

    # runtime
    monitor_interval: int = Field(10, ge=1)
    clock: Literal["cpu", "wall"] = "cpu"
