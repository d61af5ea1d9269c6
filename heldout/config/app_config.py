#!filepath: heldout/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .task_config import HeldOutConfig


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    task: HeldOutConfig

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - .env is read from the current working directory
        - HELDOUT_LOG_LEVEL / HELDOUT_LOG_DIR override the log section
        """
        load_dotenv(os.path.join(os.getcwd(), ".env"))

        if path is None:
            path = os.getenv("HELDOUT_CONFIG", "heldout.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        log = dict(raw.get("log") or {})
        if os.getenv("HELDOUT_LOG_LEVEL"):
            log["level"] = os.getenv("HELDOUT_LOG_LEVEL")
        if os.getenv("HELDOUT_LOG_DIR"):
            log["dir"] = os.getenv("HELDOUT_LOG_DIR")
        raw["log"] = log

        return cls(**raw)
