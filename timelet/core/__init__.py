from .emitter import Emitter
from .run import EmissionRun

__all__ = ["Emitter", "EmissionRun"]
