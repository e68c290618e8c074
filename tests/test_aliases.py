"""Tests for spelled-out carrier and flight-number aliases."""

import logging

import pytest

from navitas.aliases import (
    FLIGHT_NUMBER_ALIASES,
    is_spelled_out,
    normalize_airline,
    normalize_flight_number,
)
from navitas.parser import parse_navitas_text


def test_airline_alias():
    assert normalize_airline("BATWO") == "BA"
    assert normalize_airline("AA") == "AA"
    assert normalize_airline("QFA") == "QFA"


@pytest.mark.parametrize("token,expected", [
    ("EIGHTZEROZERO", "800"),
    ("FOURFIVETHREE", "453"),
    ("FOURONETWO", "412"),
    ("SEVENFIVE", "75"),
    ("2689", "2689"),
    ("0075", "0075"),
])
def test_flight_number_alias(token, expected):
    assert normalize_flight_number(token) == expected


def test_is_spelled_out():
    assert is_spelled_out("ONETWOTHREE")
    assert is_spelled_out("ZERO")
    assert not is_spelled_out("")
    assert not is_spelled_out("123")
    assert not is_spelled_out("ONETWOX")
    assert not is_spelled_out("onetwo")


def test_table_entries_are_spelled_out():
    for token, digits in FLIGHT_NUMBER_ALIASES.items():
        assert is_spelled_out(token)
        assert digits.isdigit()


def test_unmapped_spelled_out_number_is_kept_and_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="navitas.aliases"):
        assert normalize_flight_number("ONETWOTHREE") == "ONETWOTHREE"
    assert "ONETWOTHREE" in caplog.text


def test_known_number_is_not_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="navitas.aliases"):
        normalize_flight_number("SEVENFIVE")
    assert caplog.text == ""


def test_unmapped_number_still_parses():
    result = parse_navitas_text("BATWO ONETWOTHREE 1Jan LHR JFK 9:00A 12:00P")
    segment = result.options[0].segments[0]
    assert segment.airline == "BA"
    assert segment.flight_number == "ONETWOTHREE"
