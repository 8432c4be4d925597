"""
timelet: a recurring time event emitter for threads and asyncio.
"""

from timelet.base import (
    CallbackFailure,
    CancellationHandle,
    Clock,
    ConfigError,
    EmissionContext,
    InvalidEventLimit,
    InvalidInterval,
    JoinHandle,
    Runner,
    RunResult,
    Settings,
    Subscriber,
    SystemClock,
    Termination,
    TimeletError,
    UTCClock,
)
from timelet.core import EmissionRun, Emitter
from timelet.runner import AsyncJoinHandle, AsyncRunner, ThreadJoinHandle, ThreadRunner

__version__ = "0.1.0"

__all__ = [
    "Emitter",
    "EmissionRun",
    "Settings",
    "EmissionContext",
    "Termination",
    "RunResult",
    "Subscriber",
    "Clock",
    "SystemClock",
    "UTCClock",
    "Runner",
    "CancellationHandle",
    "JoinHandle",
    "ThreadRunner",
    "ThreadJoinHandle",
    "AsyncRunner",
    "AsyncJoinHandle",
    "TimeletError",
    "InvalidInterval",
    "InvalidEventLimit",
    "CallbackFailure",
    "ConfigError",
]
