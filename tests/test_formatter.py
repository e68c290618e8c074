"""Tests for rendering parse results."""

import csv
import io
import json
from io import StringIO
from unittest.mock import patch

from rich.console import Console

from navitas.formatter import format_fare, print_result, result_to_csv, result_to_json
from navitas.models import ParseResult
from navitas.parser import parse_navitas_text
from tests.mock_data import MIXED_BLOCKS, SINGLE_OPTION, TWO_OPTIONS, WITH_NOISE


def render(result: ParseResult) -> str:
    buf = StringIO()
    with patch("navitas.formatter.console", Console(file=buf, no_color=True, width=120)):
        print_result(result)
    return buf.getvalue()


def test_format_fare():
    assert format_fare(5790.81, "USD") == "USD 5,790.81"
    assert format_fare(500.0) == "500.00"
    assert format_fare(None, "USD") == "–"


def test_print_result_shows_segments():
    output = render(parse_navitas_text(SINGLE_OPTION))
    assert "Evan Lodge" in output
    assert "USD 5,790.81" in output
    assert "UCWYOJ" in output
    assert "AA 8453" in output
    assert "+1" in output
    assert "1 option parsed." in output


def test_print_result_shows_errors():
    output = render(parse_navitas_text(MIXED_BLOCKS))
    assert "Block 2: No valid flight segments found" in output
    assert "2 options parsed." in output


def test_print_result_soft_errors_with_brackets():
    text = WITH_NOISE.replace("Some unrecognized line", "[note] see [/bold] later")
    output = render(parse_navitas_text(text))
    assert "[note] see [/bold] later" in output


def test_print_result_empty():
    assert "Nothing to show." in render(ParseResult())


def test_result_to_json():
    data = json.loads(result_to_json(parse_navitas_text(TWO_OPTIONS)))
    assert data["errors"] == []
    assert [o["passenger"] for o in data["options"]] == ["John Smith", "Jane Doe"]
    first = data["options"][0]
    assert first["total_fare"] == 450.0
    assert first["source"] == "navitas"
    assert first["segments"][0] == {
        "airline": "UA",
        "flight_number": "123",
        "date_raw": "15Mar",
        "origin": "LAX",
        "destination": "JFK",
        "dep_time_raw": "8:00A",
        "arr_time_raw": "4:30P",
        "day_offset": 0,
    }


def test_result_to_csv():
    rows = list(csv.DictReader(io.StringIO(result_to_csv(parse_navitas_text(SINGLE_OPTION)))))
    assert len(rows) == 4
    assert rows[0]["passenger"] == "Evan Lodge"
    assert rows[0]["total_fare"] == "5790.81"
    assert rows[1]["segment"] == "2"
    assert rows[1]["destination"] == "HND"
    assert rows[1]["day_offset"] == "1"
