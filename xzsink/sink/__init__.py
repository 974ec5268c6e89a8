from xzsink.sink.errors import (
    CloseError,
    LeakDetected,
    ProcessExitError,
    SpawnError,
    WriteError,
    XZSinkError,
)
from xzsink.sink.process import ExitResult
from xzsink.sink.writer import CompressorSink, open_sink

__all__ = (
    "CloseError",
    "CompressorSink",
    "ExitResult",
    "LeakDetected",
    "ProcessExitError",
    "SpawnError",
    "WriteError",
    "XZSinkError",
    "open_sink",
)
