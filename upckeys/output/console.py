"""
Result Output
==============

Writes recovered candidates to stdout in one of three formats:

    - ``csv``:   ``serial,passphrase,band`` per line, or just the
      passphrase when passwords-only mode is on.
    - ``table``: a Rich table.
    - ``json``:  the full :class:`RecoveryReport`.

The ``csv`` sink streams: each line is written as soon as the engine
yields the candidate.
"""

from __future__ import annotations

from typing import Iterable

import click

from shared.console import UpcConsole
from upckeys.core.models import CandidateKey, RecoveryReport

OUTPUT_FORMATS = ("csv", "table", "json")


class ResultSink:
    """Formats candidates for the selected output mode.

    Attributes:
        passwords_only: Print the passphrase alone (``-p``).
        console: Console used for table rendering.
    """

    def __init__(
        self,
        console: UpcConsole | None = None,
        *,
        passwords_only: bool = False,
    ) -> None:
        self.console = console or UpcConsole()
        self.passwords_only = passwords_only

    def format_line(self, key: CandidateKey) -> str:
        if self.passwords_only:
            return key.passphrase
        return key.csv_line()

    def stream(self, keys: Iterable[CandidateKey]) -> int:
        """Echo one line per candidate and return how many were written."""
        count = 0
        for key in keys:
            click.echo(self.format_line(key))
            count += 1
        return count

    def display_table(self, report: RecoveryReport) -> None:
        """Render the report as a Rich table."""
        if self.passwords_only:
            columns = ["#", "Passphrase"]
            rows = [
                (idx, key.passphrase)
                for idx, key in enumerate(report.candidates, start=1)
            ]
        else:
            columns = ["#", "Serial", "Passphrase", "Band"]
            rows = [
                (idx, key.serial, key.passphrase, key.band.label)
                for idx, key in enumerate(report.candidates, start=1)
            ]
        self.console.table(
            f"Candidates for {report.essid}",
            columns,
            rows,
            caption=(
                f"{report.candidate_count} candidate(s), "
                f"{report.search_space:,} tuple search space, "
                f"{report.elapsed_seconds:.2f}s elapsed"
            ),
            styles=["dim", "bright_white", "bold green", "bright_cyan"],
        )

    def display_json(self, report: RecoveryReport) -> None:
        if self.passwords_only:
            click.echo(report.model_dump_json(
                indent=2,
                include={
                    "essid": True,
                    "target": True,
                    "candidates": {"__all__": {"passphrase"}},
                },
            ))
        else:
            click.echo(report.model_dump_json(indent=2))
