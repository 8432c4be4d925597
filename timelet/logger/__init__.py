"""
Timelet Logger Package
"""

from .run_logger import get_run_logger
from .timelet_logger import (
    LogFormat,
    LogLevel,
    TimeletLogger,
    TimeletLoggerConfig,
    configure_logging,
    get_logger,
    setup_default_logging,
)

__all__ = [
    "LogLevel",
    "LogFormat",
    "TimeletLoggerConfig",
    "TimeletLogger",
    "setup_default_logging",
    "get_logger",
    "configure_logging",
    "get_run_logger",
]

# Default logger instance for convenience
default_logger = get_logger()
