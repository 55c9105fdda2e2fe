"""
upckeys Core Data Models
=========================

Pydantic models for the passphrase recovery pipeline: the structured
serial-number digits, the two radio bands, the target ESSID, and the
records the engine hands to the output layer.

All result models are serialisable to JSON and designed for consumption
by both the plain CSV output and the ``--format json`` report.
"""

from __future__ import annotations

import enum
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ===================================================================== #
#  Search-space bounds
# ===================================================================== #

D0_MAX = 9
D1_MAX = 99
D2_MAX = 9
D3_MAX = 9999

SEARCH_SPACE_SIZE = (D0_MAX + 1) * (D1_MAX + 1) * (D2_MAX + 1) * (D3_MAX + 1)

ESSID_PREFIX = "UPC"
_ESSID_RE = re.compile(r"UPC([0-9]{7})")


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class FrequencyBand(str, enum.Enum):
    """Radio band a device broadcasts on.

    The value is the token printed in the third CSV column.  Each band
    carries the firmware constant folded into the ESSID derivation.
    """

    BAND_24 = "2.4"
    BAND_5 = "5"

    @property
    def magic(self) -> int:
        """32-bit constant added to the serial sum for this band."""
        return _BAND_MAGIC[self]

    @property
    def reverses_serial(self) -> bool:
        """5 GHz devices hash their serial number back to front."""
        return self is FrequencyBand.BAND_5

    @property
    def label(self) -> str:
        return f"{self.value} GHz"


_BAND_MAGIC: dict[FrequencyBand, int] = {
    FrequencyBand.BAND_24: 0xFF8D8F20,
    FrequencyBand.BAND_5: 0xFFD9DA60,
}


# ===================================================================== #
#  Serial Number Models
# ===================================================================== #


class SerialFields(BaseModel):
    """The variable digits of a device serial number.

    Attributes:
        d0: One digit, 0-9.
        d1: Two digits, 0-99.
        d2: One digit, 0-9.
        d3: Four digits, 0-9999.
    """

    model_config = ConfigDict(frozen=True)

    d0: int = Field(ge=0, le=D0_MAX)
    d1: int = Field(ge=0, le=D1_MAX)
    d2: int = Field(ge=0, le=D2_MAX)
    d3: int = Field(ge=0, le=D3_MAX)

    @property
    def digits(self) -> tuple[int, int, int, int]:
        return (self.d0, self.d1, self.d2, self.d3)

    @property
    def index(self) -> int:
        """Position of this tuple in lexicographic enumeration order."""
        return (
            ((self.d0 * (D1_MAX + 1) + self.d1) * (D2_MAX + 1) + self.d2)
            * (D3_MAX + 1)
            + self.d3
        )

    @classmethod
    def from_index(cls, index: int) -> SerialFields:
        """Inverse of :attr:`index`.

        Raises:
            ValueError: If *index* lies outside the search space.
        """
        if not 0 <= index < SEARCH_SPACE_SIZE:
            raise ValueError(
                f"Index {index} outside search space [0, {SEARCH_SPACE_SIZE})"
            )
        rest, d3 = divmod(index, D3_MAX + 1)
        rest, d2 = divmod(rest, D2_MAX + 1)
        d0, d1 = divmod(rest, D1_MAX + 1)
        return cls.model_construct(d0=d0, d1=d1, d2=d2, d3=d3)


class TargetEssid(BaseModel):
    """The network name under attack and its numeric identifier.

    Attributes:
        essid: Original text, ``UPC`` followed by exactly 7 digits.
        value: The 7 digits read as a decimal integer.
    """

    model_config = ConfigDict(frozen=True)

    essid: str
    value: int = Field(ge=0, le=9_999_999)

    @field_validator("essid")
    @classmethod
    def _check_format(cls, v: str) -> str:
        if not _ESSID_RE.fullmatch(v):
            raise ValueError(
                f"ESSID must be '{ESSID_PREFIX}' followed by 7 digits, got {v!r}"
            )
        return v

    @classmethod
    def parse(cls, essid: str) -> TargetEssid:
        """Build a target from raw ESSID text.

        Raises:
            ValueError: If *essid* is not in ``UPCxxxxxxx`` form.
        """
        match = _ESSID_RE.fullmatch(essid)
        if match is None:
            raise ValueError(
                f"ESSID must be '{ESSID_PREFIX}' followed by 7 digits, got {essid!r}"
            )
        return cls(essid=essid, value=int(match.group(1), 10))


# ===================================================================== #
#  Result Models
# ===================================================================== #


class CandidateKey(BaseModel):
    """One recovered (serial number, passphrase) candidate.

    Attributes:
        serial: Serial number as printed (never reversed).
        hashed_serial: The string that was actually hashed; the reverse
            of *serial* on 5 GHz.
        passphrase: 8-letter WPA2 passphrase.
        band: Band whose ESSID derivation matched.
        prefix: Operator-supplied serial prefix used for this candidate.
        serial_fields: The matching serial digits.
    """

    serial: str
    hashed_serial: str
    passphrase: str = Field(min_length=8, max_length=8)
    band: FrequencyBand
    prefix: str
    serial_fields: SerialFields

    def csv_line(self) -> str:
        return f"{self.serial},{self.passphrase},{self.band.value}"


class RecoveryReport(BaseModel):
    """Complete result of one recovery run.

    Attributes:
        essid: Target ESSID text.
        target: Numeric ESSID value searched for.
        prefixes: Serial prefixes tried, in order.
        band_filter: Band restriction, or ``None`` for both bands.
        search_space: Size of the serial space the enumerator covers; a
            ``limit`` may stop the scan before all of it is visited.
        candidates: Emitted candidates in enumeration order.
        elapsed_seconds: Wall-clock duration of the run.
    """

    essid: str
    target: int
    prefixes: list[str] = Field(default_factory=list)
    band_filter: Optional[FrequencyBand] = None
    search_space: int = 0
    candidates: list[CandidateKey] = Field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def candidate_count(self) -> int:
        return len(self.candidates)

    def passphrases(self) -> list[str]:
        return [c.passphrase for c in self.candidates]
