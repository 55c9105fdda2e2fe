"""Tests for the core data models and input parsing."""

import pytest
from pydantic import ValidationError

from upckeys.core.models import FrequencyBand, SerialFields, TargetEssid
from upckeys.parsers.essid_parser import EssidFormatError, parse_essid, split_prefixes


# ---------------------------------------------------------------------------
#  SerialFields
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "kwargs",
    [
        {"d0": 10, "d1": 0, "d2": 0, "d3": 0},
        {"d0": 0, "d1": 100, "d2": 0, "d3": 0},
        {"d0": 0, "d1": 0, "d2": -1, "d3": 0},
        {"d0": 0, "d1": 0, "d2": 0, "d3": 10_000},
    ],
)
def test_serial_fields_ranges(kwargs):
    with pytest.raises(ValidationError):
        SerialFields(**kwargs)


def test_serial_fields_frozen():
    f = SerialFields(d0=1, d1=2, d2=3, d3=4)
    with pytest.raises(ValidationError):
        f.d0 = 5


def test_serial_fields_equality_and_hash():
    a = SerialFields(d0=1, d1=2, d2=3, d3=4)
    b = SerialFields.from_index(a.index)
    assert a == b
    assert hash(a) == hash(b)


# ---------------------------------------------------------------------------
#  FrequencyBand
# ---------------------------------------------------------------------------

def test_band_tokens():
    assert FrequencyBand.BAND_24.value == "2.4"
    assert FrequencyBand.BAND_5.value == "5"
    assert FrequencyBand.BAND_5.reverses_serial
    assert not FrequencyBand.BAND_24.reverses_serial
    assert FrequencyBand.BAND_24.label == "2.4 GHz"


# ---------------------------------------------------------------------------
#  ESSID parsing
# ---------------------------------------------------------------------------

def test_parse_essid():
    target = parse_essid("UPC1234567")
    assert target == TargetEssid(essid="UPC1234567", value=1234567)


def test_parse_essid_leading_zeros_are_decimal():
    assert parse_essid("UPC0000010").value == 10
    assert parse_essid("UPC0123456").value == 123456


@pytest.mark.parametrize(
    "text",
    [
        "",
        "UPC",
        "UPC123456",
        "UPC12345678",
        "upc1234567",
        "ABC1234567",
        "UPC12345a7",
        "UPC 123456",
        "UPC-123456",
        "UPC１２３４５６７",
        "UPC1234567\n",
    ],
)
def test_parse_essid_rejects(text):
    with pytest.raises(EssidFormatError):
        parse_essid(text)


def test_target_essid_validates_directly():
    with pytest.raises(ValidationError):
        TargetEssid(essid="UPC12", value=12)


# ---------------------------------------------------------------------------
#  Prefix splitting
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("SAAP", ["SAAP"]),
        ("SAAP,SAPP,SBAP", ["SAAP", "SAPP", "SBAP"]),
        ("SAAP,,SBAP,", ["SAAP", "SBAP"]),
        (",", []),
        ("", []),
        ("A,A", ["A", "A"]),
    ],
)
def test_split_prefixes(text, expected):
    assert split_prefixes(text) == expected


def test_split_prefixes_custom_delimiter():
    assert split_prefixes("SAAP;SBAP", ";") == ["SAAP", "SBAP"]


def test_split_prefixes_empty_delimiter():
    with pytest.raises(ValueError):
        split_prefixes("SAAP", "")
