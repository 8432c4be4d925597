from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Union

from timelet.base.types import EmissionContext

EmitCallback = Callable[[datetime, EmissionContext], None]


class Subscriber(ABC):
    """
    Object form of an emit callback.
    on_emit runs synchronously on the emission worker; hand off to another
    thread or task for anything slow.
    """

    @abstractmethod
    def on_emit(self, now: datetime, context: EmissionContext) -> None:
        raise NotImplementedError("Subclasses must implement on_emit()")

    def __call__(self, now: datetime, context: EmissionContext) -> None:
        self.on_emit(now, context)


def as_callback(target: Union[Subscriber, EmitCallback]) -> EmitCallback:
    if isinstance(target, Subscriber):
        return target.on_emit
    if not callable(target):
        raise TypeError(f"Expected a callable or Subscriber, got {type(target).__name__}")
    return target
