from .app_config import AppConfig
from .log_config import LogConfig
from .task_config import ComponentConfig, HeldOutConfig

__all__ = ["AppConfig", "LogConfig", "ComponentConfig", "HeldOutConfig"]
