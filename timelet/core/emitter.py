from typing import Union

from timelet.base.clock import Clock, SystemClock
from timelet.base.runner import CancellationHandle, Runner
from timelet.base.subscriber import EmitCallback, Subscriber
from timelet.base.types import Settings
from timelet.core.run import EmissionRun
from timelet.logger import get_logger
from timelet.runner.thread_runner import ThreadRunner

logger = get_logger(__name__)


class Emitter:
    def __init__(
        self,
        settings: Settings | None = None,
        runner: Runner | None = None,
        clock: Clock | None = None,
    ):
        """
        Emitter that calls back on a fixed interval.
        The runner decides where the tick loop lives: ThreadRunner (default) or AsyncRunner.
        """
        self._settings = settings or Settings.new()
        self.runner = runner or ThreadRunner()
        self.clock = clock or SystemClock()

    @classmethod
    def new(cls) -> "Emitter":
        return cls()

    @property
    def settings(self) -> Settings:
        return self._settings

    def setup(self, settings: Settings) -> "Emitter":
        """
        Return an emitter sharing this runner and clock with different default settings.
        """
        return Emitter(settings=settings, runner=self.runner, clock=self.clock)

    def emit(self, callback: Union[Subscriber, EmitCallback]) -> CancellationHandle:
        return self.emit_with_settings(self._settings, callback)

    def emit_with_settings(
        self, settings: Settings, callback: Union[Subscriber, EmitCallback]
    ) -> CancellationHandle:
        """
        Start a run and return its handle without waiting for any tick.
        """
        if not isinstance(settings, Settings):
            raise TypeError(f"Expected Settings, got {type(settings).__name__}")
        run = EmissionRun(settings, callback, clock=self.clock)
        logger.debug(f"Starting run {run.run_id} on {type(self.runner).__name__}")
        return self.runner.start(run)
