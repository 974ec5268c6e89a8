"""Cancellation handle shared between a sink and an external actor."""

import threading
from collections.abc import Callable


class Cancellation:
    """
    Request the early termination of one or more compressor processes.

    Callbacks registered with `add_callback` run once, in the thread calling
    `cancel` (or in the timer thread when a `timeout` is given).

    >>> cancellation = Cancellation()
    >>> cancellation.cancelled
    False
    >>> cancellation.cancel()
    >>> cancellation.cancelled
    True
    """

    def __init__(self, timeout: float | None = None):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []
        self._timer: threading.Timer | None = None
        if timeout is not None:
            self._timer = threading.Timer(timeout, self.cancel)
            self._timer.daemon = True
            self._timer.start()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled, return False if `timeout` expired first."""
        return self._event.wait(timeout)

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        self.disarm()
        for callback in callbacks:
            callback()

    def disarm(self) -> None:
        """Stop the timeout timer, if any, without cancelling."""
        if self._timer:
            self._timer.cancel()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Call `callback` on cancellation, immediately if already cancelled."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
