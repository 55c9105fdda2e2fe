"""
ESSID Oracle
=============

Forward transform from a serial number's variable digits to the
7-digit number a device broadcasts as ``UPCxxxxxxx``.

The firmware computes, modulo 2**32::

    a = d1*10 + d2
    b = d0*2500000 + a*6800 + d3 + magic
    q = b // 10000000 - (b >> 31)
    essid = b - q*10000000

The ``- (b >> 31)`` term comes from a signed-division fix-up compiled
against an unsigned operand.  Both band constants are ``2**32 - k``, so
the sum only lands below ``2**31`` when it wraps; sums that do not wrap
come out in ``[10000000, 20000000)`` and can never equal a 7-digit ESSID.
The term must therefore be reproduced exactly; reducing with a plain
``b % 10000000`` accepts serials no device would have.

:func:`essid_value` is the scalar form.  :func:`essid_grid` evaluates the
same formula on numpy ``uint64`` arrays for a whole block of the search
space at once; both share :func:`reduce_essid`.
"""

from __future__ import annotations

from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from upckeys.core.models import D3_MAX, FrequencyBand, SerialFields

MAGIC_24GHZ = FrequencyBand.BAND_24.magic
MAGIC_5GHZ = FrequencyBand.BAND_5.magic

_U32_MASK = 0xFFFFFFFF
_ESSID_MODULUS = 10_000_000
_D0_WEIGHT = 2_500_000
_A_WEIGHT = 6800

U64Array = NDArray[np.uint64]
_Num = TypeVar("_Num", int, U64Array)


def reduce_essid(b: _Num) -> _Num:
    """Fold a 32-bit serial sum down to the broadcast identifier.

    Accepts a Python ``int`` or a ``uint64`` array whose elements are
    already reduced modulo 2**32.
    """
    quotient = b // _ESSID_MODULUS - (b >> 31)
    return (b - quotient * _ESSID_MODULUS) & _U32_MASK


def essid_value(fields: SerialFields, magic: int) -> int:
    """Derive the numeric ESSID a device with *fields* would broadcast.

    Args:
        fields: Serial-number digits.
        magic: Band constant, see :attr:`FrequencyBand.magic`.

    Returns:
        The identifier, a 32-bit unsigned integer.
    """
    a = fields.d1 * 10 + fields.d2
    b = (fields.d0 * _D0_WEIGHT + a * _A_WEIGHT + fields.d3 + magic) & _U32_MASK
    return reduce_essid(b)


def essid_grid(d0: int, rows: U64Array, magic: int) -> U64Array:
    """Evaluate the oracle for one ``d0`` over a block of rows.

    Args:
        d0: Leading serial digit.
        rows: ``uint64`` array of ``a = d1*10 + d2`` values.
        magic: Band constant.

    Returns:
        Array of shape ``(len(rows), 10000)``; element ``[i, d3]`` is the
        ESSID of ``(d0, rows[i] // 10, rows[i] % 10, d3)``.
    """
    d3 = np.arange(D3_MAX + 1, dtype=np.uint64)
    base = np.uint64(d0 * _D0_WEIGHT + magic)
    b = (rows[:, np.newaxis] * np.uint64(_A_WEIGHT) + d3[np.newaxis, :] + base)
    b &= np.uint64(_U32_MASK)
    return reduce_essid(b)
