import asyncio
from typing import TYPE_CHECKING, Any, Generator, Optional

from timelet.base.runner import CancellationHandle, JoinHandle, Runner
from timelet.base.types import RunResult, Termination

if TYPE_CHECKING:
    from timelet.core.run import EmissionRun


class AsyncWorker:
    """
    Drives one EmissionRun as an asyncio task.
    The callback is called synchronously inside the task; only the interval wait suspends.
    """

    def __init__(self, run: "EmissionRun", loop: asyncio.AbstractEventLoop):
        self.run = run
        self.loop = loop
        self.cancel_event = asyncio.Event()
        self.result: Optional[RunResult] = None
        self.task: asyncio.Task = loop.create_task(self._loop(), name=f"timelet-{run.run_id}")

    def cancel(self) -> None:
        if self.task.done():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self.loop:
            self.cancel_event.set()
        else:
            self.loop.call_soon_threadsafe(self.cancel_event.set)

    def final_result(self) -> Optional[RunResult]:
        # A task cancelled before its first step never ran _loop
        if self.result is None and self.task.cancelled():
            self.result = self.run.finish(Termination.CANCELLED)
        return self.result

    async def _loop(self) -> RunResult:
        result: Optional[RunResult] = None
        try:
            self.run.begin()
            while result is None:
                try:
                    await asyncio.wait_for(
                        self.cancel_event.wait(), timeout=self.run.interval_seconds
                    )
                    result = self.run.finish(Termination.CANCELLED)
                except asyncio.TimeoutError:
                    result = self.run.tick()
        except asyncio.CancelledError:
            if self.run.failure is None:
                result = self.run.finish(Termination.CANCELLED)
            raise
        finally:
            try:
                if result is None:
                    result = self.run.finish(Termination.CALLBACK_FAILED, self.run.failure)
            finally:
                self.result = result
        return result


class AsyncJoinHandle(JoinHandle):
    def __init__(self, worker: AsyncWorker):
        self._worker = worker

    def done(self) -> bool:
        return self._worker.task.done()

    def result(self) -> RunResult:
        result = self._worker.final_result() if self.done() else None
        if result is None:
            raise RuntimeError(f"Run {self._worker.run.run_id} has not finished")
        return result

    async def join(self, timeout: float | None = None) -> Optional[RunResult]:
        """
        Wait for the run to finish without blocking the event loop.
        Returns None if the timeout expires first. Cancelling the awaiting
        coroutine leaves the run itself untouched.
        """
        task = self._worker.task
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except asyncio.TimeoutError:
            return None
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
        return self._worker.final_result()

    def __await__(self) -> Generator[Any, None, Optional[RunResult]]:
        return self.join().__await__()


class AsyncRunner(Runner):
    """
    Runs every emission as a task on the caller's running event loop.
    """

    def start(self, run: "EmissionRun") -> CancellationHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise RuntimeError("AsyncRunner.start() requires a running event loop") from e
        worker = AsyncWorker(run, loop)
        return CancellationHandle(run.run_id, worker.cancel, AsyncJoinHandle(worker))
