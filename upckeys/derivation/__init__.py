"""
upckeys Derivation Pipeline
============================

The vendor algorithms that tie a serial number to its ESSID and to its
default passphrase, plus the exhaustive search that inverts the first.
"""

from upckeys.derivation.enumerator import CandidateEnumerator, iter_serial_fields
from upckeys.derivation.passphrase import (
    PASSPHRASE_ALPHABET,
    derive_passphrase,
    hash_to_passphrase,
    mangle,
)
from upckeys.derivation.serial import format_serial, render_serial
from upckeys.derivation.ssid import (
    MAGIC_5GHZ,
    MAGIC_24GHZ,
    essid_grid,
    essid_value,
)

__all__ = [
    "CandidateEnumerator",
    "MAGIC_24GHZ",
    "MAGIC_5GHZ",
    "PASSPHRASE_ALPHABET",
    "derive_passphrase",
    "essid_grid",
    "essid_value",
    "format_serial",
    "hash_to_passphrase",
    "iter_serial_fields",
    "mangle",
    "render_serial",
]
