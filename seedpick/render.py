"""Tabular rendering of search results."""

from collections.abc import Iterable

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Torrent


def build_table(torrents: Iterable[Torrent]) -> Table:
    """Table of torrents, indexed by their position."""
    table = Table(box=box.SQUARE, show_lines=True)
    table.add_column("Index", justify="right")
    table.add_column("Name", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Seeders", justify="right", style="bold bright_green")
    table.add_column("Leechers", justify="right", style="bold bright_red")
    table.add_column("Date of upload")
    table.add_column("Source")

    for i, t in enumerate(torrents):
        table.add_row(
            str(i),
            Text(t.name),
            Text(t.size),
            str(t.seeders),
            str(t.leechers),
            Text(t.uploaded),
            Text(t.source),
        )
    return table


def render(torrents: Iterable[Torrent], console: Console | None = None) -> None:
    """Print torrents as a table."""
    if console is None:
        console = Console()
    console.print(build_table(torrents))
