import threading
from collections.abc import Callable
from typing import IO


def start_stream_thread(target, *args, name: str) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, name=name, daemon=True)
    thread.start()
    return thread


def log_stream(stream: IO[bytes], handler: Callable[[str], None], prefix: str = ""):
    """Forward each line of `stream` to `handler` until end-of-file."""
    with stream:
        for line in iter(stream.readline, b""):
            handler(prefix + line.decode("utf-8", errors="replace").rstrip("\n"))


class StreamCopy:
    """Copy a child process output into a destination that has no descriptor."""

    def __init__(self, source: IO[bytes], destination: IO[bytes], chunk_size: int):
        self.source = source
        self.destination = destination
        self.chunk_size = chunk_size
        self.error: Exception | None = None
        self.thread: threading.Thread | None = None

    def start(self) -> "StreamCopy":
        self.thread = start_stream_thread(self.run, name="xzsink-stdout")
        return self

    def run(self) -> None:
        # Closing the source on error makes the child fail on its next write.
        with self.source:
            try:
                while chunk := self.source.read(self.chunk_size):
                    self.destination.write(chunk)
            except Exception as e:
                self.error = e

    def join(self) -> Exception | None:
        if self.thread:
            self.thread.join()
        return self.error
