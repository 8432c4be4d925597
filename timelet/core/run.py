from datetime import datetime
from typing import Optional, Union

from timelet.base.clock import Clock, SystemClock
from timelet.base.errors import CallbackFailure
from timelet.base.subscriber import EmitCallback, Subscriber, as_callback
from timelet.base.types import EmissionContext, RunResult, Settings, Termination
from timelet.logger import get_run_logger
from timelet.utils.id_generator import generate_run_id


class EmissionRun:
    """
    State of a single emission run.
    Only the worker driving the run calls tick() and finish().
    """

    def __init__(
        self,
        settings: Settings,
        callback: Union[Subscriber, EmitCallback],
        clock: Clock | None = None,
        run_id: str | None = None,
    ):
        self.settings = settings
        self.callback = as_callback(callback)
        self.clock = clock or SystemClock()
        self.run_id = run_id or generate_run_id()
        self.events_emitted = 0
        self.started_at: datetime | None = None
        self.finished_at: datetime | None = None
        self.failure: CallbackFailure | None = None
        self.logger = get_run_logger(self.run_id)

    @property
    def interval_seconds(self) -> float:
        return self.settings.interval_seconds

    def begin(self) -> None:
        self.started_at = datetime.now()
        self.logger.info(
            f"Emission started: interval={self.settings.interval}, "
            f"max_events={self.settings.max_events}"
        )

    def tick(self) -> Optional[RunResult]:
        """
        Deliver one event.
        Returns the final RunResult when this tick ends the run, otherwise None.
        """
        index = self.events_emitted
        try:
            now = self.clock.now()
            context = EmissionContext(index=index, settings=self.settings, run_id=self.run_id)
            self.logger.debug(f"Tick {index} at {now.isoformat()}")
            self.callback(now, context)
        except BaseException as e:
            self.failure = CallbackFailure(index, e)
            self.logger.error(f"Callback failed at index {index}: {e!r}", exc_info=True)
            if not isinstance(e, Exception):
                raise
            return self.finish(Termination.CALLBACK_FAILED, self.failure)

        self.events_emitted += 1
        max_events = self.settings.max_events
        if max_events is not None and self.events_emitted >= max_events:
            return self.finish(Termination.LIMIT_REACHED)
        return None

    def finish(self, reason: Termination, error: CallbackFailure | None = None) -> RunResult:
        # Wall clock, not the injected one: finish() must not raise
        self.finished_at = datetime.now()
        self.logger.info(f"Emission finished: reason={reason.value}, events={self.events_emitted}")
        return RunResult(
            run_id=self.run_id,
            reason=reason,
            events_emitted=self.events_emitted,
            error=error,
        )
