"""Navitas flight-text parser.

Turns text pasted from a Navitas booking screen into structured options::

    Evan Lodge
    AA 2689 10Aug PHX LAX  10:15A 11:43A
    AA 8453 10Aug LAX HND  2:15P 5:25P +1
    TOTAL FARE INC TAX  USD5790.81
    Reference: UCWYOJ

A paste may hold several options separated by blank lines. Each line of a
block is classified by an ordered list of line rules; lines matching none of
them are kept as soft errors on the option instead of failing the parse.
``parse_navitas_text`` never raises, whatever it is given.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .aliases import normalize_airline, normalize_flight_number
from .models import NavitasOption, NavitasSegment, ParseResult

logger = logging.getLogger(__name__)

INVALID_INPUT_ERROR = "Invalid input: expected non-empty string"
NO_BLOCKS_ERROR = "No valid option blocks found"
NO_SEGMENTS_ERROR = "No valid flight segments found"

_BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n")

_PASSENGER_RE = re.compile(r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+")

# AA 2689 10Aug PHX LAX  10:15A 11:43A
# BATWO EIGHTZEROZERO 29Jun LAX LHR 5:05P 11:35A +1
_SEGMENT_RE = re.compile(
    r"""
    (?P<airline>[A-Z]{2,5})\s+
    (?P<flight>[A-Z0-9]+)\s+
    (?P<date>[0-9]{1,2}[A-Za-z]{3})\s+
    (?P<origin>[A-Z]{3})\s+
    (?P<destination>[A-Z]{3})\s+
    (?P<dep>[0-9]{1,2}:[0-9]{2}[AP])\s+
    (?P<arr>[0-9]{1,2}:[0-9]{2}[AP])
    (?:\s+\+(?P<offset>[0-9]))?
    """,
    re.VERBOSE,
)

# TOTAL FARE INC TAX  USD5790.81
_FARE_RE = re.compile(
    r"(?i:TOTAL\s+FARE\s+INC\s+TAX)\s+(?P<currency>[A-Z]{3})\s*(?P<amount>[0-9]+(?:\.[0-9]{2})?)"
)

# Reference: UCWYOJ
_REFERENCE_RE = re.compile(r"(?i:Reference):\s+(?P<code>[A-Za-z0-9]{6})")


class LineKind(Enum):
    PASSENGER = "passenger"
    SEGMENT = "segment"
    FARE = "fare"
    REFERENCE = "reference"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ParsedLine:
    """A classified line and its payload.

    ``value`` depends on ``kind``: the passenger name, a NavitasSegment,
    a ``(currency, amount)`` tuple, the reference code, or the line itself
    when unrecognized.
    """
    kind: LineKind
    value: Any


def _build_segment(m: re.Match) -> NavitasSegment:
    offset = m.group("offset")
    return NavitasSegment(
        airline=normalize_airline(m.group("airline")),
        flight_number=normalize_flight_number(m.group("flight")),
        date_raw=m.group("date"),
        origin=m.group("origin"),
        destination=m.group("destination"),
        dep_time_raw=m.group("dep"),
        arr_time_raw=m.group("arr"),
        day_offset=int(offset) if offset else 0,
    )


def _build_fare(m: re.Match) -> tuple[str, float]:
    return m.group("currency"), float(m.group("amount"))


# Evaluated top to bottom; the first matching rule classifies the line.
_LINE_RULES: list[tuple[LineKind, re.Pattern, Callable[[re.Match], Any]]] = [
    (LineKind.PASSENGER, _PASSENGER_RE, lambda m: m.group(0)),
    (LineKind.SEGMENT, _SEGMENT_RE, _build_segment),
    (LineKind.FARE, _FARE_RE, _build_fare),
    (LineKind.REFERENCE, _REFERENCE_RE, lambda m: m.group("code")),
]


def classify_line(line: str, passenger_taken: bool = False) -> ParsedLine:
    """Classify a single trimmed line.

    Once a block has a passenger, name-shaped lines are no longer passenger
    candidates and fall through to the other rules.
    """
    for kind, pattern, build in _LINE_RULES:
        if kind is LineKind.PASSENGER and passenger_taken:
            continue
        m = pattern.fullmatch(line)
        if m:
            return ParsedLine(kind, build(m))
    return ParsedLine(LineKind.UNRECOGNIZED, line)


def split_blocks(text: str) -> list[str]:
    """Split a paste into trimmed, non-empty option blocks."""
    if not isinstance(text, str):
        return []
    trimmed = text.strip()
    blocks = [b.strip() for b in _BLOCK_SEPARATOR_RE.split(trimmed) if b.strip()]
    if not blocks and trimmed:
        blocks = [trimmed]
    return blocks


def _parse_block(block: str) -> NavitasOption:
    lines = [line.strip() for line in block.split("\n")]

    passenger: Optional[str] = None
    total_fare: Optional[float] = None
    currency: Optional[str] = None
    reference: Optional[str] = None
    segments: list[NavitasSegment] = []
    errors: list[str] = []

    for line in lines:
        if not line:
            continue
        parsed = classify_line(line, passenger_taken=passenger is not None)
        if parsed.kind is LineKind.PASSENGER:
            passenger = parsed.value
        elif parsed.kind is LineKind.SEGMENT:
            segments.append(parsed.value)
        elif parsed.kind is LineKind.FARE:
            currency, total_fare = parsed.value
        elif parsed.kind is LineKind.REFERENCE:
            reference = parsed.value
        else:
            errors.append(f'Unrecognized line: "{line}"')

    return NavitasOption(
        raw=block,
        segments=segments,
        passenger=passenger,
        total_fare=total_fare,
        currency=currency,
        reference=reference,
        errors=errors,
    )


def parse_navitas_text(text: Any) -> ParseResult:
    """Parse a Navitas paste into options and block-level errors.

    Args:
        text: Raw pasted text. Anything that is not a non-blank string
            yields a single "Invalid input" error.

    Returns:
        ParseResult whose ``options`` keep block order. Blocks without a
        flight segment, or that fail unexpectedly, are reported in
        ``errors`` as ``"Block <n>: ..."`` and skipped.
    """
    if not isinstance(text, str) or not text.strip():
        return ParseResult(errors=[INVALID_INPUT_ERROR])

    blocks = split_blocks(text)
    if not blocks:
        return ParseResult(errors=[NO_BLOCKS_ERROR])

    options: list[NavitasOption] = []
    errors: list[str] = []

    for i, block in enumerate(blocks, start=1):
        try:
            option = _parse_block(block)
        except Exception as e:
            logger.warning(f"Block {i} could not be parsed: {e!r}")
            errors.append(f"Block {i}: {str(e) or 'Parse error'}")
            continue

        if option.segments:
            options.append(option)
        else:
            errors.append(f"Block {i}: {NO_SEGMENTS_ERROR}")

    logger.debug(f"Parsed {len(options)} option(s) from {len(blocks)} block(s)")
    return ParseResult(options=options, errors=errors)


parse = parse_navitas_text
