"""
Abandonment detection for sinks that are never released.

A sink owns a running process: losing the last reference to it without
releasing it leaks the process and truncates the compressed output. The
guard turns this programming error into a loud diagnostic naming the line
that created the sink. See https://crawshaw.io/blog/sharp-edged-finalizers.
"""

import os
import sys
import weakref
from logging import LoggerAdapter

from xzsink.sink.errors import LeakDetected


def find_creation_site() -> str:
    """Location of the first caller outside of this package, as `file:line`."""
    frame = sys._getframe(1)
    while frame is not None:
        module = frame.f_globals.get("__name__", "")
        if module != __package__ and not module.startswith(f"{__package__}."):
            return f"{frame.f_code.co_filename}:{frame.f_lineno}"
        frame = frame.f_back
    return "<unknown>"


def report_leak(creation_site: str, action: str, logger: LoggerAdapter) -> None:
    error = LeakDetected(creation_site)
    logger.critical("%s", error)
    if action == "abort":
        os.abort()
    if action == "raise":
        raise error


class LifecycleGuard:
    """Fire `report_leak` once if `owner` is collected while still active."""

    def __init__(
        self, owner: object, creation_site: str, action: str, logger: LoggerAdapter
    ):
        self.creation_site = creation_site
        # The finalizer must not reference `owner`, or it would never be collected.
        self._finalizer = weakref.finalize(
            owner, report_leak, creation_site, action, logger
        )
        # Reachability only: sinks still alive at interpreter exit are not reported.
        self._finalizer.atexit = False

    @property
    def active(self) -> bool:
        return self._finalizer.alive

    def deactivate(self) -> None:
        self._finalizer.detach()
