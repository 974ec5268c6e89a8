"""Exceptions raised by compressor sinks."""


class XZSinkError(Exception):
    """Base class of all the compressor sink errors."""


class SpawnError(XZSinkError):
    """The compressor could not be started."""


class WriteError(XZSinkError):
    """Bytes could not be forwarded to the compressor."""


class ProcessExitError(XZSinkError):
    """The compressor exited with a non-zero status or was killed."""

    def __init__(self, result):
        self.result = result
        if (exit_signal := result.exit_signal) is not None:
            message = f"compressor killed by {exit_signal.name}"
        elif result.returncode < 0:
            message = f"compressor killed by signal {-result.returncode}"
        else:
            message = f"compressor exited with status {result.returncode}"
        super().__init__(message)


class CloseError(XZSinkError):
    """
    Releasing the sink failed.

    `pipe_error` is the failure to close the compressor input, `exit_error`
    the failure reported when waiting for the compressor. When both are set,
    the pipe error is the one reported in the message and chained as cause.
    """

    def __init__(self, pipe_error: Exception | None, exit_error: Exception | None):
        self.pipe_error = pipe_error
        self.exit_error = exit_error
        super().__init__(f"cannot release compressor sink: {pipe_error or exit_error}")


class LeakDetected(XZSinkError):
    """A sink was garbage collected without being released."""

    def __init__(self, creation_site: str):
        self.creation_site = creation_site
        super().__init__(
            f"compressor sink created at {creation_site}, but never released"
        )
