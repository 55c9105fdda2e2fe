"""
Passphrase Derivation
======================

Turns a serial-number string into the device's default WPA2 passphrase
in two MD5 stages.

Mangle:
    ``md5(serial)`` is split into two 8-byte halves, each read as four
    little-endian ``uint16`` values ``pp[0..3]``.  Every half is folded
    into a 32-bit word::

        b = (pp[3] % 9999 + 1) * 11
        word = b * (pp[1]*100 + pp[2]*10 + pp[0])   (mod 2**32)

    and the two words are written as 16 uppercase hex digits.

Fold:
    The first 8 bytes of ``md5(mangled)`` each pick a letter: the low
    five bits are reduced modulo 23 and mapped onto ``A..Z`` with ``I``,
    ``L`` and ``O`` skipped.
"""

from __future__ import annotations

import hashlib
import string
import struct
from typing import Sequence

PASSPHRASE_LENGTH = 8
PASSPHRASE_ALPHABET = "".join(
    c for c in string.ascii_uppercase if c not in "ILO"
)

_HALF = struct.Struct("<4H")
_U32_MASK = 0xFFFFFFFF


def mangle_words(pp: Sequence[int]) -> int:
    """Fold four 16-bit values into one 32-bit word."""
    b = (pp[3] % 9999 + 1) * 11
    return (b * (pp[1] * 100 + pp[2] * 10 + pp[0])) & _U32_MASK


def mangle(digest: bytes) -> str:
    """Mangle a 16-byte digest into its 16-character hex form."""
    if len(digest) != 16:
        raise ValueError(f"expected a 16-byte digest, got {len(digest)} bytes")
    w1 = mangle_words(_HALF.unpack_from(digest, 0))
    w2 = mangle_words(_HALF.unpack_from(digest, 8))
    return f"{w1:08X}{w2:08X}"


def _letter(byte: int) -> str:
    a = (byte & 0x1F) % 23
    code = a + ord("A")
    # Each skip re-tests the already bumped code.
    if code >= ord("I"):
        code += 1
    if code >= ord("L"):
        code += 1
    if code >= ord("O"):
        code += 1
    return chr(code)


def hash_to_passphrase(digest: bytes) -> str:
    """Map the first 8 bytes of *digest* to passphrase letters."""
    if len(digest) < PASSPHRASE_LENGTH:
        raise ValueError(
            f"need at least {PASSPHRASE_LENGTH} digest bytes, got {len(digest)}"
        )
    return "".join(_letter(b) for b in digest[:PASSPHRASE_LENGTH])


def derive_passphrase(serial: str) -> str:
    """Derive the 8-letter WPA2 passphrase for a hashed serial string.

    Args:
        serial: The candidate serial exactly as hashed, i.e. already
            reversed for 5 GHz devices.

    Returns:
        Passphrase drawn from :data:`PASSPHRASE_ALPHABET`.
    """
    first = hashlib.md5(serial.encode("utf-8")).digest()
    mangled = mangle(first)
    second = hashlib.md5(mangled.encode("ascii")).digest()
    return hash_to_passphrase(second)
