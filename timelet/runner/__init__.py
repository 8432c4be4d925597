from .async_runner import AsyncJoinHandle, AsyncRunner
from .thread_runner import ThreadJoinHandle, ThreadRunner

__all__ = ["AsyncRunner", "AsyncJoinHandle", "ThreadRunner", "ThreadJoinHandle"]
