"""
Logging setup using Loguru.

Library modules log through `from loguru import logger`; applications call
setup_loguru() (or configure_logging()) once to choose where records go.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import Config, get_data_dir


def get_log_file_path() -> Path:
    """Get the default path to the log file."""
    return get_data_dir() / "music-radio.log"


def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    rotation_mb: int = 10,
    retention: int = 5,
    console_output: bool = False,
) -> None:
    """
    Configure loguru for file logging, optionally mirrored to stderr.

    Args:
        log_file: Path to log file
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation_mb: Rotate the file once it reaches this size
        retention: Number of rotated files to keep
        console_output: Also write records to stderr
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation=f"{rotation_mb} MB",
        retention=retention,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def configure_logging(config: Config, log_file: Optional[Path] = None) -> Path:
    """
    Set up loguru from the [logging] config section.

    Args:
        config: Loaded configuration
        log_file: Override for the log file path

    Returns:
        The log file in use
    """
    logging_config = config.logging
    if log_file is None:
        log_file = (
            Path(logging_config.log_file)
            if logging_config.log_file
            else get_log_file_path()
        )

    setup_loguru(
        log_file,
        level=logging_config.level,
        rotation_mb=logging_config.max_file_size_mb,
        retention=logging_config.backup_count,
        console_output=logging_config.console_output,
    )
    return log_file
