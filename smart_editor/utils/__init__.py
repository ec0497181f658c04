# smart_editor/utils/__init__.py
# app-level helpers shared by the CLI and the TUI host

from .config_manager import Config
from .logger_utils import Log, setup_logging

__all__ = ["Config", "Log", "setup_logging"]
