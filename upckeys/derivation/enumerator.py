"""
Candidate Enumerator
=====================

Exhaustive search of the serial-number space for tuples whose derived
ESSID equals the target.

The space is the nested product ``d0 in 0..9``, ``d1 in 0..99``,
``d2 in 0..9``, ``d3 in 0..9999`` (100,000,000 tuples).  Because the
oracle only sees ``d1`` and ``d2`` through ``a = d1*10 + d2``, and
``a`` runs 0..999 in the same order as ``(d1, d2)``, the scan walks
``(d0, block of a, all d3)`` chunks and evaluates each chunk as a single
numpy grid.  Matches inside a chunk come back in row-major order, which
is the lexicographic ``(d0, d1, d2, d3)`` order of the nested loops.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from upckeys.core.models import (
    D0_MAX,
    D1_MAX,
    D2_MAX,
    D3_MAX,
    FrequencyBand,
    SerialFields,
)
from upckeys.derivation.ssid import essid_grid

_ROWS_PER_D0 = (D1_MAX + 1) * (D2_MAX + 1)
_COLUMNS = D3_MAX + 1

# Both bands are tested per tuple; 2.4 GHz is emitted first on a tie.
_BAND_ORDER: tuple[FrequencyBand, ...] = (FrequencyBand.BAND_24, FrequencyBand.BAND_5)

Match = tuple[SerialFields, FrequencyBand]


def iter_serial_fields() -> Iterator[SerialFields]:
    """Yield every serial tuple in nested ``d0, d1, d2, d3`` order.

    Lazy and restartable: each call starts a fresh pass.
    """
    construct = SerialFields.model_construct
    for d0 in range(D0_MAX + 1):
        for d1 in range(D1_MAX + 1):
            for d2 in range(D2_MAX + 1):
                for d3 in range(D3_MAX + 1):
                    yield construct(d0=d0, d1=d1, d2=d2, d3=d3)


@dataclass(frozen=True, slots=True)
class _Chunk:
    d0: int
    row_start: int
    row_stop: int

    @property
    def size(self) -> int:
        return (self.row_stop - self.row_start) * _COLUMNS


class CandidateEnumerator:
    """Finds the serial tuples consistent with a target ESSID.

    Usage::

        enumerator = CandidateEnumerator()
        for fields, band in enumerator.matches(1234567):
            ...

    Attributes:
        rows_per_chunk: ``a`` rows evaluated per numpy grid.
        workers: Threads evaluating chunks; 1 scans inline.
        d0_range: Leading digits to visit, a sub-range of ``range(10)``.
    """

    def __init__(
        self,
        *,
        rows_per_chunk: int = 100,
        workers: int = 1,
        d0_range: Optional[Iterable[int]] = None,
    ) -> None:
        if rows_per_chunk < 1:
            raise ValueError("rows_per_chunk must be >= 1")
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.rows_per_chunk = rows_per_chunk
        self.workers = workers
        self.d0_range: tuple[int, ...] = tuple(
            range(D0_MAX + 1) if d0_range is None else d0_range
        )
        for d0 in self.d0_range:
            if not 0 <= d0 <= D0_MAX:
                raise ValueError(f"d0 out of range: {d0}")

    @property
    def space_size(self) -> int:
        """Number of tuples a full :meth:`matches` pass visits."""
        return len(self.d0_range) * _ROWS_PER_D0 * _COLUMNS

    def matches(
        self,
        target: int,
        band: Optional[FrequencyBand] = None,
    ) -> Iterator[Match]:
        """Yield ``(fields, band)`` pairs whose ESSID equals *target*.

        Args:
            target: Numeric ESSID value.
            band: Restrict results to one band; ``None`` tests both.

        Yields:
            Matches in enumeration order.  A tuple matching both bands is
            yielded twice, 2.4 GHz first.
        """
        bands = _BAND_ORDER if band is None else (band,)
        chunks = self._chunks()

        if self.workers == 1:
            for chunk in chunks:
                yield from self._scan(chunk, target, bands)
            return

        pool = ThreadPoolExecutor(max_workers=self.workers)
        try:
            for found in pool.map(
                lambda c: list(self._scan(c, target, bands)), chunks
            ):
                yield from found
        finally:
            # Consumers may stop early; drop chunks not yet started.
            pool.shutdown(wait=True, cancel_futures=True)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _chunks(self) -> list[_Chunk]:
        return [
            _Chunk(d0, start, min(start + self.rows_per_chunk, _ROWS_PER_D0))
            for d0 in self.d0_range
            for start in range(0, _ROWS_PER_D0, self.rows_per_chunk)
        ]

    @staticmethod
    def _scan(
        chunk: _Chunk,
        target: int,
        bands: Sequence[FrequencyBand],
    ) -> Iterator[Match]:
        rows = np.arange(chunk.row_start, chunk.row_stop, dtype=np.uint64)

        hits: list[tuple[int, int, FrequencyBand]] = []
        for rank, band in enumerate(bands):
            grid = essid_grid(chunk.d0, rows, band.magic)
            for pos in np.flatnonzero(grid == target).tolist():
                hits.append((pos, rank, band))
        hits.sort(key=lambda h: (h[0], h[1]))

        for pos, _, band in hits:
            row, d3 = divmod(pos, _COLUMNS)
            a = chunk.row_start + row
            d1, d2 = divmod(a, D2_MAX + 1)
            yield SerialFields(d0=chunk.d0, d1=d1, d2=d2, d3=d3), band
