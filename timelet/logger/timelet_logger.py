"""
Timelet Logger Module

Logging for the timelet emitter:
- Configurable log levels
- Simple text, detailed text or JSON output
- Always logs to stdout with optional (rotating) file output
- Child loggers under the `timelet.` namespace share the root handlers
"""

import json
import logging
import logging.handlers
import sys
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

ROOT_LOGGER_NAME = "timelet"


class LogLevel(Enum):
    """Enumeration for log levels."""

    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    NOTSET = logging.NOTSET


class LogFormat(Enum):
    """Enumeration for log output formats."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


class JSONFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "thread": record.threadName,
            "function": record.funcName,
            "line": record.lineno,
        }

        run_id = getattr(record, "run_id", None)
        if run_id is not None:
            log_entry["run_id"] = run_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_entry.update(extra_fields)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class TimeletLoggerConfig:
    """Configuration class for the timelet logger."""

    def __init__(
        self,
        level: Union[LogLevel, str, int] = LogLevel.INFO,
        format_type: Union[LogFormat, str] = LogFormat.DETAILED,
        log_file: Optional[str] = None,
        rotation: bool = False,
        max_backup: int = 5,
        extra_fields: Optional[Dict[str, Any]] = None,
    ):
        """Initialize logger configuration.

        Args:
            level: Logging level (LogLevel enum, string, or int)
            format_type: Format type for log messages (LogFormat or its value)
            log_file: Optional path to log file for additional file output
            rotation: Enable log rotation at midnight
            max_backup: Maximum number of backup files to keep
            extra_fields: Additional fields to include in JSON log messages
        """
        self.level = self._normalize_level(level)
        self.format_type = LogFormat(format_type)
        self.log_file = log_file
        self.rotation = rotation
        self.max_backup = max_backup
        self.extra_fields = extra_fields or {}

    def _normalize_level(self, level: Union[LogLevel, str, int]) -> int:
        if isinstance(level, LogLevel):
            return level.value
        if isinstance(level, str):
            return getattr(logging, level.upper(), logging.INFO)
        if isinstance(level, int):
            return level
        raise ValueError(f"Invalid log level: {level}")


class _ExtraFieldsFilter(logging.Filter):
    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        if self.extra_fields and not hasattr(record, "extra_fields"):
            setattr(record, "extra_fields", self.extra_fields)
        return True


class TimeletLogger:
    """Process-wide owner of the `timelet` logger handlers."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config: Optional[TimeletLoggerConfig] = None):
        """Initialize the logger.

        Args:
            config: Logger configuration. If None, keeps the current one
                (or the defaults on first use).
        """
        if hasattr(self, "_initialized"):
            if config is not None:
                self.update_config(config)
            return

        self.config = config or TimeletLoggerConfig()
        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._setup_logger()
        self._initialized = True

    def _setup_logger(self):
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        self.logger.setLevel(self.config.level)
        formatter = self._create_formatter()

        self.logger.addHandler(self._create_console_handler(formatter))
        if self.config.log_file:
            self.logger.addHandler(self._create_file_handler(formatter))

        # Disable propagation to avoid duplicate logs
        self.logger.propagate = False

    def _create_formatter(self) -> logging.Formatter:
        if self.config.format_type == LogFormat.JSON:
            return JSONFormatter()

        formats = {
            LogFormat.SIMPLE: "%(levelname)s - %(message)s",
            LogFormat.DETAILED: (
                "%(asctime)s - %(name)s - %(levelname)s - "
                "%(threadName)s:%(funcName)s:%(lineno)d - %(message)s"
            ),
        }
        return logging.Formatter(formats[self.config.format_type])

    def _create_console_handler(self, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        handler.addFilter(_ExtraFieldsFilter(self.config.extra_fields))
        return handler

    def _create_file_handler(self, formatter: logging.Formatter) -> logging.Handler:
        if self.config.log_file is None:
            raise ValueError("log_file cannot be None when creating file handler")

        log_path = Path(self.config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config.rotation:
            handler: logging.Handler = logging.handlers.TimedRotatingFileHandler(
                self.config.log_file,
                when="midnight",
                interval=1,
                backupCount=self.config.max_backup,
                encoding="utf-8",
            )
        else:
            handler = logging.FileHandler(self.config.log_file, encoding="utf-8")

        handler.setFormatter(formatter)
        handler.addFilter(_ExtraFieldsFilter(self.config.extra_fields))
        return handler

    def get_logger(self, name: str | None = None) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name. If None, returns the root timelet logger.
                Names already under the `timelet.` namespace are used as-is.

        Returns:
            Logger instance.
        """
        if name is None or name == ROOT_LOGGER_NAME:
            return self.logger
        if not name.startswith(f"{ROOT_LOGGER_NAME}."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        # Children carry no handlers of their own and propagate to the root
        return logging.getLogger(name)

    def update_config(self, new_config: TimeletLoggerConfig):
        self.config = new_config
        self._setup_logger()

    def add_handler(self, handler: logging.Handler):
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler):
        self.logger.removeHandler(handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the `timelet` namespace.

    Args:
        name: Logger name. If None, returns the root timelet logger.
    """
    return TimeletLogger().get_logger(name)


def configure_logging(config: TimeletLoggerConfig):
    """Replace the active logging configuration."""
    TimeletLogger().update_config(config)


def setup_default_logging(
    level: Union[LogLevel, str, int] = LogLevel.INFO,
    log_file: Optional[str] = None,
    format_type: LogFormat = LogFormat.DETAILED,
    rotation: bool = False,
    max_backup: int = 5,
):
    """Set up default logging configuration.

    Args:
        level: Logging level
        log_file: Optional path to log file
        format_type: Format type for log messages
        rotation: Enable log rotation at midnight
        max_backup: Maximum number of backup files to keep
    """
    configure_logging(
        TimeletLoggerConfig(
            level=level,
            log_file=log_file,
            format_type=format_type,
            rotation=rotation,
            max_backup=max_backup,
        )
    )
