"""Core infrastructure layer - configuration and logging.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging setup (Loguru)
"""

# Configuration
from .config import (
    Config,
    LoggingConfig,
    RadioConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
)

# Logging
from .output import configure_logging, get_log_file_path, setup_loguru

__all__ = [
    # Config
    "Config",
    "RadioConfig",
    "LoggingConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    # Logging
    "setup_loguru",
    "configure_logging",
    "get_log_file_path",
]
