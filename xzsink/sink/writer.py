"""Compressor sink: a writable stream piped through an external `xz`."""

from collections.abc import Iterable
from logging import LoggerAdapter
from typing import IO

from xzsink.commons.cancellation import Cancellation
from xzsink.commons.logger import Adapter, base_logger
from xzsink.commons.settings import SinkSettings
from xzsink.sink.errors import CloseError, WriteError
from xzsink.sink.guard import LifecycleGuard, find_creation_site
from xzsink.sink.process import spawn


class CompressorSink:
    """
    Binary stream compressing everything written to it with an external `xz`.

    The compressed stream is written to `destination` as the compressor
    produces it. The destination is borrowed: it is never closed by the sink.
    `cancellation` may be used to kill the compressor early; the sink must
    still be released afterwards.

    Every sink must be released, either with `release` (or `close`), or by
    using it as a context manager. A sink garbage collected while still open
    is reported as a leak according to `settings.XZSINK_LEAK_ACTION`.
    """

    def __init__(
        self,
        destination: IO[bytes],
        cancellation: Cancellation | None = None,
        *,
        settings: SinkSettings | None = None,
        logger: LoggerAdapter | None = None,
    ):
        settings = settings or SinkSettings()
        creation_site = find_creation_site()
        self._logger = logger or Adapter(
            base_logger, dict(component="sink", site=creation_site)
        )
        self._destination = destination
        self._process = spawn(
            destination, cancellation, settings=settings, logger=self._logger
        )
        self._pipe = self._process.stdin
        self._guard = LifecycleGuard(
            self, creation_site, settings.XZSINK_LEAK_ACTION, self._logger
        )
        self._released = False
        self._close_error: CloseError | None = None

    @property
    def creation_site(self) -> str:
        return self._guard.creation_site

    @property
    def closed(self) -> bool:
        return self._released

    def writable(self) -> bool:
        return not self._released

    def write(self, data) -> int:
        """Forward `data` to the compressor, blocking until it is all accepted."""
        view = memoryview(data).cast("B")
        if not view:
            return 0
        if self._released:
            raise WriteError("write to a released compressor sink")
        written = 0
        try:
            while written < len(view):
                written += self._pipe.write(view[written:])
        except OSError as e:
            raise WriteError(f"cannot write to compressor: {e}") from e
        return written

    def writelines(self, lines: Iterable) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        # Writes are unbuffered, there is nothing to flush.
        pass

    def release(self) -> None:
        """
        Close the compressor input and wait for it to exit.

        Both steps always run; if both fail, the input close failure is the one
        reported. Releasing an already released sink does nothing and reports
        the outcome of the first release again.
        """
        if self._released:
            if self._close_error:
                raise self._close_error
            return
        self._guard.deactivate()

        pipe_error = None
        try:
            self._pipe.close()
        except OSError as e:
            pipe_error = e
        # Interrupted waits leave the sink open, so that a retry reaps the process.
        result = self._process.wait()
        exit_error = result.error()
        self._released = True

        if pipe_error or exit_error:
            self._close_error = CloseError(pipe_error, exit_error)
            self._logger.info("Released with error: %s", pipe_error or exit_error)
            raise self._close_error from pipe_error or exit_error
        self._logger.debug("Released")

    def close(self) -> None:
        self.release()

    def __enter__(self) -> "CompressorSink":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()


def open_sink(
    destination: IO[bytes],
    cancellation: Cancellation | None = None,
    *,
    settings: SinkSettings | None = None,
    logger: LoggerAdapter | None = None,
) -> CompressorSink:
    """Start a compressor writing to `destination`, see `CompressorSink`."""
    return CompressorSink(destination, cancellation, settings=settings, logger=logger)
