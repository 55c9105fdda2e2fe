"""
upckeys Console Interface
==========================

Rich-powered console used by the upckeys CLI: result tables on stdout,
warnings and the scan spinner on stderr.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_UPC_THEME = Theme(
    {
        "upc.warning": "bold yellow",
        "upc.info": "bold bright_blue",
    }
)


class UpcConsole:
    """Console pair for upckeys output.

    Usage::

        con = UpcConsole()
        con.warning("No serial prefixes given")
        con.table("Candidates", ["Serial", "Passphrase"], rows)
    """

    def __init__(self) -> None:
        self._out = Console(theme=_UPC_THEME, highlight=False)
        self._err = Console(theme=_UPC_THEME, stderr=True, highlight=False)

    def warning(self, message: str) -> None:
        self._err.print(
            f"[upc.warning][⚠] WARNING:[/upc.warning] {message}"
        )

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table on stdout.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Row tuples; each element is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._out.print(tbl)

    @contextmanager
    def status(
        self, message: str = "Working..."
    ) -> Generator[Any, None, None]:
        """Show a stderr spinner while the block runs."""
        with self._err.status(
            f"[upc.info]{message}[/upc.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj
