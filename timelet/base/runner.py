from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Generator

from timelet.base.types import RunResult
from timelet.logger import get_logger

if TYPE_CHECKING:
    from timelet.core.run import EmissionRun

logger = get_logger(__name__)


class JoinHandle(ABC):
    """
    Resolves once the emission worker has left its loop.
    """

    @abstractmethod
    def done(self) -> bool:
        raise NotImplementedError("Subclasses must implement done()")

    @abstractmethod
    def result(self) -> RunResult:
        """
        The run's outcome. Raises RuntimeError while the run is still going.
        """
        raise NotImplementedError("Subclasses must implement result()")

    @abstractmethod
    def __await__(self) -> Generator[Any, None, RunResult]:
        raise NotImplementedError("Subclasses must implement __await__()")


class CancellationHandle:
    """
    Returned by Emitter.emit(). unsubscribe() asks the run to stop and hands back
    the join primitive; calling it again is a no-op that returns the same handle.
    """

    def __init__(self, run_id: str, cancel: Callable[[], None], join: JoinHandle):
        self._run_id = run_id
        self._cancel = cancel
        self._join = join
        self._cancel_requested = False

    @property
    def run_id(self) -> str:
        return self._run_id

    @property
    def join(self) -> JoinHandle:
        return self._join

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested

    @property
    def finished(self) -> bool:
        return self._join.done()

    def unsubscribe(self) -> JoinHandle:
        if self._cancel_requested:
            logger.debug(f"Run {self._run_id} already unsubscribed")
            return self._join
        self._cancel_requested = True
        if self._join.done():
            logger.debug(f"Run {self._run_id} already finished")
        else:
            self._cancel()
        return self._join


class Runner(ABC):
    """
    Strategy that drives an EmissionRun on some worker context.
    """

    @abstractmethod
    def start(self, run: "EmissionRun") -> CancellationHandle:
        raise NotImplementedError("Subclasses must implement start()")
