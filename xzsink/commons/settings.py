import logging
from typing import Literal

from pydantic import PositiveInt
from pydantic_settings import BaseSettings


class SinkSettings(BaseSettings):
    """Compressor sink settings."""

    XZSINK_EXECUTABLE: str = "xz"  # name looked up in PATH, or a path
    XZSINK_LEAK_ACTION: Literal["abort", "raise", "log"] = "abort"
    XZSINK_COPY_CHUNK_SIZE: PositiveInt = 2**16  # bytes
    XZSINK_STDERR_LOGGING_LEVEL: int = logging.WARNING
