"""
Input Parsing
==============

Validation of the two positional inputs: the target ESSID and the list
of serial-number prefixes.

Supported formats:
    - ESSID: ``UPC`` followed by exactly 7 decimal digits,
      e.g. ``UPC1234567``.  Leading zeros are read as decimal.
    - Prefixes: delimiter-separated strings, e.g. ``SAAP,SAPP,SBAP``.
      Empty pieces (``SAAP,,SAPP`` or a trailing comma) are skipped.
"""

from __future__ import annotations

from pydantic import ValidationError

from upckeys.core.models import TargetEssid


class EssidFormatError(ValueError):
    """Raised when an ESSID is not in ``UPCxxxxxxx`` form."""


def parse_essid(text: str) -> TargetEssid:
    """Parse *text* into a :class:`TargetEssid`.

    Raises:
        EssidFormatError: If *text* is not ``UPC`` plus 7 digits.
    """
    try:
        return TargetEssid.parse(text)
    except (ValueError, ValidationError) as exc:
        raise EssidFormatError(
            f"ESSID should be in 'UPCxxxxxxx' format (7 digits), got {text!r}"
        ) from exc


def split_prefixes(text: str, delimiter: str = ",") -> list[str]:
    """Split the PREFIXES argument, preserving order and duplicates."""
    if not delimiter:
        raise ValueError("prefix delimiter must not be empty")
    return [piece for piece in text.split(delimiter) if piece]
