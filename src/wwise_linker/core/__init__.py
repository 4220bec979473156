"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML + .env)
- Output and logging (Loguru)
- Console management (Rich)
"""

from .config import (
    Config,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
)
from .console import get_console, print_status
from .output import LogBuffer, clear_ui_buffer, log, set_ui_buffer, setup_loguru

__all__ = [
    # Config
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    # Output
    "LogBuffer",
    "log",
    "setup_loguru",
    "set_ui_buffer",
    "clear_ui_buffer",
    # Console
    "get_console",
    "print_status",
]
