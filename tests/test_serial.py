"""Tests for serial-number rendering."""

import random

import pytest

from upckeys.core.models import FrequencyBand
from upckeys.derivation.serial import format_serial, render_serial

from vectors import REFERENCE_24, REFERENCE_SERIALS_24, fields


def test_zero_padding():
    assert render_serial("ABC", fields(0, 0, 0, 0)) == "ABC00000000"
    assert render_serial("ABC", fields(1, 2, 3, 4)) == "ABC10230004"
    assert render_serial("ABC", fields(9, 99, 9, 9999)) == "ABC99999999"


def test_reference_serials():
    rendered = [render_serial("ABC", fields(*d)) for d in REFERENCE_24]
    assert rendered == REFERENCE_SERIALS_24


def test_band_24_is_unchanged():
    f = fields(3, 18, 1, 3767)
    assert format_serial("SAAP", f, FrequencyBand.BAND_24) == "SAAP31813767"


def test_band_5_is_reversed_including_prefix():
    f = fields(3, 18, 1, 3767)
    assert format_serial("SAAP", f, FrequencyBand.BAND_5) == "76731813PAAS"


def test_empty_prefix():
    assert format_serial("", fields(0, 5, 0, 12), FrequencyBand.BAND_5) == "21000050"


@pytest.mark.parametrize("prefix", ["SAAP", "SBAP", "X", "LONGERPREFIX"])
def test_band_asymmetry(prefix):
    rng = random.Random(prefix)
    for _ in range(200):
        f = fields(rng.randint(0, 9), rng.randint(0, 99), rng.randint(0, 9), rng.randint(0, 9999))
        forward = format_serial(prefix, f, FrequencyBand.BAND_24)
        assert format_serial(prefix, f, FrequencyBand.BAND_5) == forward[::-1]
        assert len(forward) == len(prefix) + 8
