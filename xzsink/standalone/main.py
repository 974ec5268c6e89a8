import logging
import sys
import time
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

import typer

from xzsink.commons.cancellation import Cancellation
from xzsink.sink import XZSinkError, open_sink
from xzsink.standalone.display import compression_ratio, display_stats
from xzsink.standalone.logger import create_logger

app = typer.Typer()


@app.command()
def compress(
    input_path: Optional[Path] = typer.Argument(None, metavar="INPUT"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    timeout: Optional[float] = typer.Option(None, help="Kill xz after this delay."),
    chunk_size: int = typer.Option(2**16, min=1),
    stats: bool = typer.Option(False, "--stats"),
    verbose: bool = typer.Option(False, "--verbose"),
):
    """Compress INPUT (or stdin) with xz into OUTPUT (or stdout)."""
    logger = create_logger(logging.DEBUG if verbose else logging.ERROR)
    cancellation = Cancellation(timeout) if timeout else None

    start_time = time.monotonic()
    bytes_in = 0
    with ExitStack() as stack:
        if cancellation:
            stack.callback(cancellation.disarm)
        source = (
            stack.enter_context(input_path.open("rb"))
            if input_path
            else sys.stdin.buffer
        )
        destination = (
            stack.enter_context(output.open("wb")) if output else sys.stdout.buffer
        )
        try:
            with open_sink(destination, cancellation) as sink:
                while chunk := source.read(chunk_size):
                    bytes_in += sink.write(chunk)
        except XZSinkError as e:
            logger.error("%s", e)
            raise typer.Exit(1)
        destination.flush()

    if stats:
        bytes_out = output.stat().st_size if output else None
        display_stats(
            dict(
                bytes_in=bytes_in,
                bytes_out=bytes_out,
                ratio=compression_ratio(bytes_in, bytes_out),
                elapsed=round(time.monotonic() - start_time, 3),
            )
        )


if __name__ == "__main__":
    app()
