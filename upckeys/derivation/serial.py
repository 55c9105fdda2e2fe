"""Serial-number rendering for matched digit tuples."""

from __future__ import annotations

from upckeys.core.models import FrequencyBand, SerialFields


def render_serial(prefix: str, fields: SerialFields) -> str:
    """Return ``prefix`` followed by the digits as ``D DD D DDDD``."""
    return f"{prefix}{fields.d0:d}{fields.d1:02d}{fields.d2:d}{fields.d3:04d}"


def format_serial(prefix: str, fields: SerialFields, band: FrequencyBand) -> str:
    """Return the serial string the device hashes on *band*.

    5 GHz firmware feeds the serial into the key derivation reversed
    end to end, prefix included.
    """
    serial = render_serial(prefix, fields)
    if band.reverses_serial:
        return serial[::-1]
    return serial
