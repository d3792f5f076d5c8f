"""
Logging configuration for osm-services.

Handles log directory detection per platform, the log file location
and the knobs used by setup_logging.
"""

import os
import platform
from pathlib import Path
from enum import Enum
from typing import Optional
from dataclasses import dataclass
from osm_services.constants import (
    LOG_FILE_NAME,
    LOG_LEVEL_ENV,
    LOG_RETENTION_DAYS,
    SENSITIVE_KEYS
)


class LogLevel(Enum):
    """Log levels for osm-services logging"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class LogConfig:
    """Configuration class for osm-services logging"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS

    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.WARNING

    include_timestamps: bool = True
    include_thread_info: bool = False

    # API logging settings
    log_api_calls: bool = True
    max_payload_size: int = 1024  # Max chars of a response body logged in verbose mode

    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS

    @classmethod
    def from_env(cls) -> "LogConfig":
        """Build a config whose default level may be overridden by the environment."""
        config = cls()
        level = os.environ.get(LOG_LEVEL_ENV, "").upper()
        if level in LogLevel.__members__:
            config.default_level = LogLevel[level]
        return config


def get_log_directory() -> Path:
    """
    Get the appropriate log directory for the current operating system.

    Returns:
        Path: Platform-specific log directory, created if missing. Falls
        back to ./logs when the platform directory cannot be created.
    """
    system = platform.system().lower()

    if system == "windows":
        base_dir = Path(os.environ.get("APPDATA", ""))
        if not base_dir.exists():
            base_dir = Path.home()
        log_dir = base_dir / LOG_FILE_NAME / "logs"

    elif system == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / LOG_FILE_NAME

    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME")
        if xdg_data_home:
            base_dir = Path(xdg_data_home)
        else:
            base_dir = Path.home() / ".local" / "share"
        log_dir = base_dir / LOG_FILE_NAME / "logs"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
    except OSError:
        fallback_dir = Path.cwd() / "logs"
        fallback_dir.mkdir(exist_ok=True)
        return fallback_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    """Get the full path to the log file."""
    if config is None:
        config = LogConfig()

    log_dir = get_log_directory()
    return log_dir / config.log_filename
