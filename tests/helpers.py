import lzma
import os
import shutil
import sys
from contextlib import contextmanager

import pytest

requires_xz = pytest.mark.skipif(
    shutil.which("xz") is None, reason="this test requires the xz executable"
)


def decompress(data: bytes) -> bytes:
    return lzma.decompress(data, format=lzma.FORMAT_XZ)


def is_running(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    return True


def make_executable(path, script: str):
    path.write_text(f"#!/bin/sh\n{script}\n")
    path.chmod(0o755)
    return path


@contextmanager
def catch_unraisable():
    """Collect the exceptions raised by finalizers."""
    errors = []
    old_hook = sys.unraisablehook
    sys.unraisablehook = errors.append
    try:
        yield errors
    finally:
        sys.unraisablehook = old_hook
