from typing import Optional

from rich.console import Console
from rich.highlighter import ReprHighlighter
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table


def compression_ratio(bytes_in: int, bytes_out: int | None) -> float | None:
    """
    >>> compression_ratio(100, 25)
    4.0
    >>> compression_ratio(0, 32) is None
    True
    >>> compression_ratio(100, None) is None
    True
    """
    if not bytes_in or not bytes_out:
        return None
    return round(bytes_in / bytes_out, 2)


def display_stats(stats: dict, console: Optional[Console] = None):
    if not console:
        console = Console(stderr=True)

    items_table = Table.grid(padding=(0, 1), expand=True)
    items_table.add_column(justify="right")
    items_table.add_column()
    for label, key in [
        ("bytes in =", "bytes_in"),
        ("bytes out =", "bytes_out"),
        ("ratio =", "ratio"),
        ("elapsed (s) =", "elapsed"),
    ]:
        value = stats.get(key)
        items_table.add_row(
            label,
            "-" if value is None else Pretty(value, highlighter=ReprHighlighter()),
        )

    console.print(
        Panel.fit(
            items_table,
            title="compression statistics",
            border_style="scope.border",
            padding=(0, 1),
        )
    )
