"""
Key Recovery Engine
====================

Central orchestrator for the upckeys recovery pipeline.  The
:class:`KeyRecoveryEngine` drives the candidate search, renders a serial
number per matching tuple and prefix, derives its passphrase, and hands
back :class:`CandidateKey` records, either streamed or collected into a
:class:`RecoveryReport`.

Architecture follows the Facade pattern (Gamma et al., 1994), giving the
CLI a single entry point over the derivation subsystems.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
    - Lorente, E. N., Meijer, C., & Verdult, R. (2015). Scrutinizing WPA2
      Password Generating Algorithms in Wireless Routers. USENIX WOOT.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from shared.config import UpcConfig
from shared.logger import ToolLogger

from upckeys.core.models import (
    CandidateKey,
    FrequencyBand,
    RecoveryReport,
    TargetEssid,
)
from upckeys.derivation.enumerator import CandidateEnumerator
from upckeys.derivation.passphrase import derive_passphrase
from upckeys.derivation.serial import format_serial, render_serial


class KeyRecoveryEngine:
    """Recovers candidate WPA2 passphrases for a UPC ESSID.

    Usage::

        engine = KeyRecoveryEngine()
        target = parse_essid("UPC1234567")
        for key in engine.candidates(target, ["SAAP", "SBAP"]):
            print(key.csv_line())

        report = engine.recover(target, ["SAAP"], band=FrequencyBand.BAND_24)

    Attributes:
        config: Configuration instance.
        logger: Logger for the engine.
        enumerator: Serial-space search used for every run.
    """

    def __init__(
        self,
        config: Optional[UpcConfig] = None,
        *,
        enumerator: Optional[CandidateEnumerator] = None,
        logger: Optional[ToolLogger] = None,
    ) -> None:
        self.config = config or UpcConfig()
        self.logger = logger or ToolLogger.from_config("engine", self.config)
        self.enumerator = enumerator or CandidateEnumerator(
            rows_per_chunk=self.config.search.rows_per_chunk,
            workers=self.config.search.workers,
        )

    # ------------------------------------------------------------------ #
    #  Streaming search
    # ------------------------------------------------------------------ #

    def candidates(
        self,
        target: TargetEssid,
        prefixes: Sequence[str],
        band: Optional[FrequencyBand] = None,
        limit: Optional[int] = None,
    ) -> Iterator[CandidateKey]:
        """Yield one candidate per matching tuple and prefix.

        Args:
            target: Parsed ESSID.
            prefixes: Serial prefixes, tried in order for every match.
            band: Only report matches on this band.
            limit: Stop after this many candidates.

        Yields:
            Candidates in enumeration order, prefixes innermost.
        """
        if limit is not None and limit <= 0:
            return

        emitted = 0
        with self.logger.operation("scan"):
            self.logger.debug(
                "Scanning %d serial tuples for %s (band=%s)",
                self.enumerator.space_size,
                target.essid,
                band.label if band else "any",
            )
            for fields, matched_band in self.enumerator.matches(target.value, band):
                self.logger.debug(
                    "Tuple %s matches on %s", fields.digits, matched_band.label
                )
                for prefix in prefixes:
                    hashed = format_serial(prefix, fields, matched_band)
                    yield CandidateKey(
                        serial=render_serial(prefix, fields),
                        hashed_serial=hashed,
                        passphrase=derive_passphrase(hashed),
                        band=matched_band,
                        prefix=prefix,
                        serial_fields=fields,
                    )
                    emitted += 1
                    if limit is not None and emitted >= limit:
                        self.logger.info("Stopped after %d candidates", emitted)
                        return

    # ------------------------------------------------------------------ #
    #  Collected run
    # ------------------------------------------------------------------ #

    def recover(
        self,
        target: TargetEssid,
        prefixes: Sequence[str],
        band: Optional[FrequencyBand] = None,
        limit: Optional[int] = None,
    ) -> RecoveryReport:
        """Run the full search and collect the candidates into a report."""
        report = RecoveryReport(
            essid=target.essid,
            target=target.value,
            prefixes=list(prefixes),
            band_filter=band,
            search_space=self.enumerator.space_size,
        )

        with self.logger.timed(f"recovery for {target.essid}") as watch:
            report.candidates = list(
                self.candidates(target, prefixes, band=band, limit=limit)
            )
        report.elapsed_seconds = watch.elapsed
        if not report.candidates:
            self.logger.info("No candidates for %s", target.essid)
        return report
