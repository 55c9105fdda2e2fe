"""Tests for the recovery engine."""

import json

import pytest

from upckeys.core.models import FrequencyBand, RecoveryReport
from upckeys.derivation.passphrase import PASSPHRASE_ALPHABET, derive_passphrase
from upckeys.parsers.essid_parser import parse_essid

from vectors import KNOWN_ANSWERS, REFERENCE_ESSID

TARGET = parse_essid(REFERENCE_ESSID)


def test_candidates_per_prefix(make_engine):
    engine = make_engine(d0_range=[3])
    keys = list(engine.candidates(TARGET, ["ABC", "XYZ"], band=FrequencyBand.BAND_24))

    assert [k.serial for k in keys] == ["ABC31813767", "XYZ31813767"]
    assert [k.prefix for k in keys] == ["ABC", "XYZ"]
    for key in keys:
        assert key.hashed_serial == key.serial
        assert key.passphrase == derive_passphrase(key.serial)
        assert key.band is FrequencyBand.BAND_24
        assert key.serial_fields.digits == (3, 18, 1, 3767)


def test_5ghz_hashes_reversed_serial_but_prints_forward(make_engine):
    engine = make_engine(d0_range=[1])
    keys = list(engine.candidates(TARGET, ["ABC"], band=FrequencyBand.BAND_5))

    assert len(keys) == 1
    key = keys[0]
    assert key.serial == "ABC11813767"
    assert key.hashed_serial == "76731811CBA"
    assert key.passphrase == derive_passphrase("76731811CBA") == "MEHETGZC"
    assert key.csv_line() == f"ABC11813767,{key.passphrase},5"


def test_prefixes_innermost(make_engine):
    engine = make_engine(d0_range=[2])
    keys = list(engine.candidates(TARGET, ["A", "B"], band=FrequencyBand.BAND_24))
    assert [k.serial for k in keys] == ["A25488167", "B25488167", "A25491367", "B25491367"]


def test_limit_stops_early(make_engine):
    engine = make_engine(d0_range=range(0, 10))
    keys = list(engine.candidates(TARGET, ["A", "B"], limit=3))
    assert len(keys) == 3
    assert list(engine.candidates(TARGET, ["A"], limit=0)) == []


def test_no_prefixes_no_candidates(make_engine):
    engine = make_engine(d0_range=[3])
    assert list(engine.candidates(TARGET, [])) == []


def test_recover_report(make_engine):
    engine = make_engine(d0_range=[3])
    report = engine.recover(TARGET, ["ABC"])

    assert isinstance(report, RecoveryReport)
    assert report.essid == REFERENCE_ESSID
    assert report.target == 1234567
    assert report.search_space == 10_000_000
    assert report.band_filter is None
    assert [(k.serial, k.band) for k in report.candidates] == [
        ("ABC31813767", FrequencyBand.BAND_24),
        ("ABC39165767", FrequencyBand.BAND_5),
    ]
    assert report.elapsed_seconds >= 0.0
    for phrase in report.passphrases():
        assert set(phrase) <= set(PASSPHRASE_ALPHABET)


def test_recover_zero_matches(make_engine):
    engine = make_engine(d0_range=[0])
    report = engine.recover(TARGET, ["ABC"], band=FrequencyBand.BAND_24)
    assert report.candidate_count == 0


def test_report_json_round_trip(make_engine):
    report = make_engine(d0_range=[3]).recover(TARGET, ["ABC"])
    data = json.loads(report.model_dump_json())
    assert data["candidates"][0]["band"] == "2.4"
    assert data["candidates"][1]["band"] == "5"
    assert RecoveryReport.model_validate(data) == report


@pytest.mark.parametrize("serial, hashed, phrase, token", KNOWN_ANSWERS)
def test_candidates_known_answers(make_engine, serial, hashed, phrase, token):
    band = FrequencyBand(token)
    engine = make_engine(d0_range=[int(serial[3])])
    keys = {k.serial: k for k in engine.candidates(TARGET, ["ABC"], band=band)}

    key = keys[serial]
    assert key.hashed_serial == hashed
    assert key.passphrase == phrase
    assert key.csv_line() == f"{serial},{phrase},{token}"


def test_search_space_is_space_size_even_with_limit(make_engine):
    engine = make_engine(d0_range=[3])
    report = engine.recover(TARGET, ["ABC"], limit=1)
    assert report.candidate_count == 1
    assert report.search_space == engine.enumerator.space_size == 10_000_000
    assert "tuples_scanned" not in report.model_dump()
