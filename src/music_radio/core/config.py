"""
Configuration management for Music Radio
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from music_radio.domain.radio.store import DEFAULT_CAPACITY


@dataclass
class RadioConfig:
    """Configuration for radio stores and their text format."""

    capacity: int = DEFAULT_CAPACITY  # Maximum number of tracks per radio
    quoted_values: bool = True  # Dequote "..." values in track descriptors

    def validate(self) -> None:
        """Validate radio configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise ValueError(f"capacity must be an integer, got {self.capacity!r}")
        if self.capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {self.capacity}")
        if not isinstance(self.quoted_values, bool):
            raise ValueError(
                f"quoted_values must be true or false, got {self.quoted_values!r}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/music-radio/music-radio.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to stderr (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    radio: RadioConfig = field(default_factory=RadioConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "music-radio"
    return Path.home() / ".config" / "music-radio"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/music-radio (or ~/.config/music-radio)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "music-radio"
    return Path.home() / ".local" / "share" / "music-radio"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return f"""
# Music Radio Configuration

[radio]
# Maximum number of tracks a radio can hold (fixed once created)
capacity = {DEFAULT_CAPACITY}

# Strip double quotes around descriptor values, e.g. title:"Paint It, Black".
# When false, quote characters are kept verbatim in the value.
quoted_values = true

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/music-radio/music-radio.log)
# log_file = "/path/to/custom/music-radio.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to stderr (useful for debugging)
console_output = false
""".strip()


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - MUSIC_RADIO_CAPACITY
    - MUSIC_RADIO_LOG_LEVEL

    Args:
        path: Config file to read (default: get_config_path())

    Returns:
        Loaded configuration

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = Path(path) if path else get_config_path()
    config = Config()

    if config_path.exists():
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        if "radio" in toml_data:
            radio_data = toml_data["radio"]
            config.radio = RadioConfig(
                capacity=radio_data.get("capacity", config.radio.capacity),
                quoted_values=radio_data.get(
                    "quoted_values", config.radio.quoted_values
                ),
            )

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            log_file = logging_data.get("log_file")
            if log_file:
                log_file = str(Path(log_file).expanduser())
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level).upper(),
                log_file=log_file,
                max_file_size_mb=logging_data.get(
                    "max_file_size_mb", config.logging.max_file_size_mb
                ),
                backup_count=logging_data.get(
                    "backup_count", config.logging.backup_count
                ),
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )
    else:
        logger.debug(f"No config file at {config_path}, using defaults")

    # Environment overrides
    capacity = os.environ.get("MUSIC_RADIO_CAPACITY")
    if capacity:
        try:
            config.radio.capacity = int(capacity)
        except ValueError:
            logger.warning(f"Ignoring non-integer MUSIC_RADIO_CAPACITY={capacity!r}")

    log_level = os.environ.get("MUSIC_RADIO_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    try:
        config.radio.validate()
    except ValueError as e:
        logger.warning(f"Invalid radio configuration: {e}. Using defaults.")
        config.radio = RadioConfig()

    return config
