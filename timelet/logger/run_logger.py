"""
Run Logger Module

Gives every emission run its own logger with the run_id attached to each record.
"""

import logging
from typing import Any, MutableMapping

from .timelet_logger import TimeletLogger


class RunLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds run_id context to all log messages."""

    def __init__(self, logger: logging.Logger, run_id: str):
        super().__init__(logger, {"run_id": run_id})
        self.run_id = run_id

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(kwargs.get("extra") or {}), "run_id": self.run_id}
        return f"[{self.run_id}] {msg}", kwargs


def get_run_logger(run_id: str) -> logging.LoggerAdapter:
    """Get a logger for one emission run.

    Args:
        run_id: Identifier of the run

    Returns:
        Logger adapter with run context
    """
    base_logger = TimeletLogger().get_logger("run")
    return RunLoggerAdapter(base_logger, run_id)
