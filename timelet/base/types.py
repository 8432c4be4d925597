from datetime import timedelta
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from timelet.base.errors import CallbackFailure, InvalidEventLimit, InvalidInterval

DEFAULT_INTERVAL = timedelta(seconds=1)

IntervalLike = Union[timedelta, int, float]


def to_interval(value: IntervalLike) -> timedelta:
    """
    Normalize a duration given as timedelta or seconds.
    Raises InvalidInterval unless the result is strictly positive.
    """
    if isinstance(value, bool) or not isinstance(value, (timedelta, int, float)):
        raise InvalidInterval(f"Interval must be a timedelta or seconds, got {value!r}")
    try:
        interval = value if isinstance(value, timedelta) else timedelta(seconds=value)
    except (ValueError, OverflowError) as e:
        raise InvalidInterval(f"Interval out of range: {value!r}") from e
    if interval <= timedelta(0):
        raise InvalidInterval(f"Interval must be positive, got {interval}")
    return interval


class Settings(BaseModel):
    """
    Immutable emission settings.
    Every setter returns a new instance so a running emission never observes a change.
    """

    model_config = ConfigDict(frozen=True)

    interval: timedelta = Field(default=DEFAULT_INTERVAL, gt=timedelta(0))
    max_events: Optional[int] = Field(default=None, ge=1)

    @classmethod
    def new(cls) -> "Settings":
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        """
        Build settings from a config mapping.
        Accepts `interval` in seconds or `interval_ms`, and an optional `max_events`.
        """
        settings = cls.new()
        if data.get("interval_ms") is not None:
            interval_ms = data["interval_ms"]
            if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)):
                raise InvalidInterval(f"interval_ms must be a number, got {interval_ms!r}")
            settings = settings.set_interval(interval_ms / 1000)
        elif data.get("interval") is not None:
            settings = settings.set_interval(data["interval"])
        if data.get("max_events") is not None:
            settings = settings.set_max_events(data["max_events"])
        return settings

    @property
    def interval_seconds(self) -> float:
        return self.interval.total_seconds()

    def set_interval(self, interval: IntervalLike) -> "Settings":
        return self.model_copy(update={"interval": to_interval(interval)})

    def set_max_events(self, max_events: int) -> "Settings":
        if isinstance(max_events, bool) or not isinstance(max_events, int):
            raise InvalidEventLimit(f"Event limit must be an integer, got {max_events!r}")
        if max_events < 1:
            raise InvalidEventLimit(f"Event limit must be at least 1, got {max_events}")
        return self.model_copy(update={"max_events": max_events})

    def clear_max_events(self) -> "Settings":
        return self.model_copy(update={"max_events": None})


class EmissionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    settings: Settings
    run_id: str


class Termination(Enum):
    """
    Why an emission run stopped.
    """

    LIMIT_REACHED = "limit_reached"
    CANCELLED = "cancelled"
    CALLBACK_FAILED = "callback_failed"


class RunResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    run_id: str
    reason: Termination
    events_emitted: int
    error: Optional[CallbackFailure] = None
