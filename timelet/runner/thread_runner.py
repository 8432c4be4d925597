import asyncio
import threading
import time
from typing import TYPE_CHECKING, Any, Generator, Optional

from timelet.base.runner import CancellationHandle, JoinHandle, Runner
from timelet.base.types import RunResult, Termination

if TYPE_CHECKING:
    from timelet.core.run import EmissionRun

# Event.wait overflows for timeouts past threading.TIMEOUT_MAX or the platform time_t
MAX_WAIT_CHUNK = min(threading.TIMEOUT_MAX, 24 * 60 * 60.0)


class ThreadWorker:
    """
    Drives one EmissionRun on a dedicated OS thread.
    The interval wait doubles as the cancellation check.
    """

    def __init__(self, run: "EmissionRun", daemon: bool = True):
        self.run = run
        self.cancel_event = threading.Event()
        self.finished_event = threading.Event()
        self.result: Optional[RunResult] = None
        self.thread = threading.Thread(
            target=self._loop, name=f"timelet-{run.run_id}", daemon=daemon
        )

    def start(self) -> None:
        self.thread.start()

    def cancel(self) -> None:
        self.cancel_event.set()

    def _wait(self, timeout: float) -> bool:
        """
        Wait for cancellation for up to timeout seconds, in chunks the platform accepts.
        """
        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return self.cancel_event.is_set()
            if self.cancel_event.wait(min(remaining, MAX_WAIT_CHUNK)):
                return True

    def _loop(self) -> None:
        result: Optional[RunResult] = None
        try:
            try:
                self.run.begin()
                while result is None:
                    if self._wait(self.run.interval_seconds):
                        result = self.run.finish(Termination.CANCELLED)
                    else:
                        result = self.run.tick()
            except BaseException:
                # A worker thread has nobody to raise to; the failure travels on the RunResult
                if self.run.failure is None:
                    raise
        finally:
            try:
                if result is None:
                    result = self.run.finish(Termination.CALLBACK_FAILED, self.run.failure)
            finally:
                self.result = result
                self.finished_event.set()


class ThreadJoinHandle(JoinHandle):
    def __init__(self, worker: ThreadWorker):
        self._worker = worker

    def done(self) -> bool:
        return self._worker.finished_event.is_set()

    def result(self) -> RunResult:
        if not self.done() or self._worker.result is None:
            raise RuntimeError(f"Run {self._worker.run.run_id} has not finished")
        return self._worker.result

    def join(self, timeout: float | None = None) -> Optional[RunResult]:
        """
        Block until the run has finished.
        Returns None if the timeout expires first.
        """
        if threading.current_thread() is self._worker.thread:
            raise RuntimeError("Cannot join an emission run from inside its own callback")
        if not self._worker.finished_event.wait(timeout):
            return None
        self._worker.thread.join()
        return self._worker.result

    def __await__(self) -> Generator[Any, None, Optional[RunResult]]:
        return asyncio.to_thread(self.join).__await__()


class ThreadRunner(Runner):
    """
    Runs every emission on its own thread with a blocking interval wait.
    """

    def __init__(self, daemon: bool = True):
        self.daemon = daemon

    def start(self, run: "EmissionRun") -> CancellationHandle:
        worker = ThreadWorker(run, daemon=self.daemon)
        handle = CancellationHandle(run.run_id, worker.cancel, ThreadJoinHandle(worker))
        worker.start()
        return handle
