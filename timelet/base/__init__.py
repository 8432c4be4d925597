from .clock import Clock, SystemClock, UTCClock
from .errors import (
    CallbackFailure,
    ConfigError,
    InvalidEventLimit,
    InvalidInterval,
    TimeletError,
)
from .runner import CancellationHandle, JoinHandle, Runner
from .subscriber import EmitCallback, Subscriber
from .types import EmissionContext, RunResult, Settings, Termination

__all__ = [
    "Clock",
    "SystemClock",
    "UTCClock",
    "TimeletError",
    "InvalidInterval",
    "InvalidEventLimit",
    "CallbackFailure",
    "ConfigError",
    "CancellationHandle",
    "JoinHandle",
    "Runner",
    "EmitCallback",
    "Subscriber",
    "EmissionContext",
    "RunResult",
    "Settings",
    "Termination",
]
