"""External compressor process interface."""

import io
import shutil
import signal
import subprocess
import threading
from dataclasses import dataclass
from logging import LoggerAdapter
from typing import IO

from xzsink.commons.cancellation import Cancellation
from xzsink.commons.settings import SinkSettings
from xzsink.commons.subprocess import StreamCopy, log_stream, start_stream_thread
from xzsink.sink.errors import ProcessExitError, SpawnError

# Quiet, compress, write to stdout, maximum compression, read from stdin.
XZ_ARGUMENTS = ("--quiet", "--compress", "--stdout", "--best", "-")


@dataclass(frozen=True)
class ExitResult:
    returncode: int
    copy_error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and self.copy_error is None

    @property
    def exit_signal(self) -> signal.Signals | None:
        """The signal that terminated the process, if any."""
        if self.returncode < 0:
            try:
                return signal.Signals(-self.returncode)
            except ValueError:
                # Unnamed signals, such as most real-time ones.
                return None
        return None

    def error(self) -> Exception | None:
        if self.returncode != 0:
            return ProcessExitError(self)
        return self.copy_error


def output_fileno(destination: IO[bytes]) -> int | None:
    """
    Return the descriptor the child can write to directly, if any.

    >>> output_fileno(io.BytesIO()) is None
    True
    """
    try:
        fileno = destination.fileno()
    except (AttributeError, io.UnsupportedOperation):
        return None
    # Bytes buffered by Python must land before the compressed stream.
    if flush := getattr(destination, "flush", None):
        flush()
    return fileno


class Process:
    """A running compressor whose output is bound to a destination."""

    def __init__(
        self,
        popen: subprocess.Popen,
        copier: StreamCopy | None,
        stderr_thread: threading.Thread,
        cancellation: Cancellation | None,
        logger: LoggerAdapter,
    ):
        self.popen = popen
        self.copier = copier
        self.stderr_thread = stderr_thread
        self.cancellation = cancellation
        self.logger = logger

    @property
    def pid(self) -> int:
        return self.popen.pid

    @property
    def stdin(self) -> IO[bytes]:
        return self.popen.stdin  # type: ignore

    def running(self) -> bool:
        return self.popen.poll() is None

    def terminate(self) -> None:
        """Kill the process, this does not release the sink resources."""
        if self.running():
            self.logger.info("Killing pid %s", self.pid)
            # No-op if the process exited in the meantime.
            self.popen.kill()

    def wait(self) -> ExitResult:
        """Block until the process exits and its output is drained."""
        returncode = self.popen.wait()
        if self.cancellation:
            self.cancellation.remove_callback(self.terminate)
        copy_error = self.copier.join() if self.copier else None
        self.stderr_thread.join()
        self.logger.debug("Pid %s exited with status %s", self.pid, returncode)
        return ExitResult(returncode, copy_error)


def spawn(
    destination: IO[bytes],
    cancellation: Cancellation | None = None,
    *,
    settings: SinkSettings,
    logger: LoggerAdapter,
) -> Process:
    """
    Start the compressor, writing its output to `destination`.
    The process input is returned as an unbuffered pipe in `Process.stdin`.
    """
    executable = shutil.which(settings.XZSINK_EXECUTABLE)
    if not executable:
        raise SpawnError(f"{settings.XZSINK_EXECUTABLE}: executable not found")

    if getattr(destination, "closed", False):
        raise SpawnError("destination is closed")
    try:
        fileno = output_fileno(destination)
    except (OSError, ValueError) as e:
        raise SpawnError(f"cannot flush destination: {e}") from e

    cmd = [executable, *XZ_ARGUMENTS]
    try:
        popen = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE if fileno is None else fileno,
            stderr=subprocess.PIPE,
            bufsize=0,
        )
    except OSError as e:
        raise SpawnError(f"cannot start {executable}: {e}") from e
    logger.debug("Spawned %s with pid %s", " ".join(cmd), popen.pid)

    try:
        copier = None
        if fileno is None:
            copier = StreamCopy(
                popen.stdout,  # type: ignore
                destination,
                settings.XZSINK_COPY_CHUNK_SIZE,
            ).start()
        stderr_thread = start_stream_thread(
            log_stream,
            popen.stderr,
            lambda line: logger.log(settings.XZSINK_STDERR_LOGGING_LEVEL, line),
            name="xzsink-stderr",
        )
    except RuntimeError as e:
        popen.kill()
        for stream in (popen.stdin, popen.stdout, popen.stderr):
            if stream:
                stream.close()
        popen.wait()
        raise SpawnError(f"cannot watch pid {popen.pid}: {e}") from e

    process = Process(popen, copier, stderr_thread, cancellation, logger)
    if cancellation:
        # Kills the process right away if the cancellation already fired.
        cancellation.add_callback(process.terminate)
    return process
