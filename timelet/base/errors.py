class TimeletError(Exception):
    """Base class for all timelet errors."""


class InvalidInterval(TimeletError, ValueError):
    """Raised when an emission interval is not strictly positive."""


class InvalidEventLimit(TimeletError, ValueError):
    """Raised when a maximum event count is lower than one."""


class ConfigError(TimeletError):
    """Exception raised for configuration errors."""


class CallbackFailure(TimeletError):
    """
    The callback raised while handling a tick.
    The original exception is available as __cause__.
    """

    def __init__(self, index: int, error: BaseException):
        super().__init__(f"Callback failed at index {index}: {error!r}")
        self.index = index
        self.error = error
        self.__cause__ = error
