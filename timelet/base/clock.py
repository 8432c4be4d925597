from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """Time source sampled once per tick."""

    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError("Subclasses must implement now()")


class SystemClock(Clock):
    """Local wall clock time."""

    def now(self) -> datetime:
        return datetime.now()


class UTCClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
