"""
Logging setup: compact console output plus an optional rotating log file.
"""

import os
import logging
import logging.handlers
from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3

    @classmethod
    def from_dict(cls, config: dict) -> "LoggingConfig":
        """Create config from dictionary."""
        return cls(
            level=config.get("level", "INFO"),
            log_file=config.get("log_file"),
            max_size_mb=config.get("max_size_mb", 10),
            backup_count=config.get("backup_count", 3),
        )


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure application logging."""
    # Clean console format, compact and readable
    console_format = "%(asctime)s  %(levelname)-5s  %(name)s: %(message)s"
    # Verbose format for log file
    file_format = "%(asctime)s [%(levelname)-7s] %(threadName)-12s %(name)-35s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(level))

    # Remove existing handlers
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    # File handler (rotating)
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


def setup_logging_from_config(config: LoggingConfig):
    return setup_logging(
        level=config.level,
        log_file=config.log_file,
        max_size_mb=config.max_size_mb,
        backup_count=config.backup_count,
    )


def set_log_level(level: Union[str, int]) -> int:
    """Change the root log level at runtime. Returns the numeric level."""
    numeric = _to_level(level)
    logging.getLogger().setLevel(numeric)
    return numeric
