"""Platform helpers: file locations and subprocess execution."""

from .paths import central_config_path, clear_caches, home, user_config_path
from .process import ProcessError, run, run_streaming

__all__ = [
    "ProcessError",
    "central_config_path",
    "clear_caches",
    "home",
    "run",
    "run_streaming",
    "user_config_path",
]
