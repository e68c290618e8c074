"""Map parsed options onto the records the booking store expects.

The parser returns fares as decimal amounts and segments as raw text tokens.
The store keeps money in integer cents and one ``option_components`` row per
flight leg, optionally carrying terminal/gate data fetched from an external
enrichment service. Nothing here talks to the store or to that service.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from .models import SOURCE_NAVITAS, NavitasOption, NavitasSegment

DEFAULT_CURRENCY = "USD"
DEFAULT_OPTION_NAME = "Flight Option"

# AA 2689 PHX-LAX 10Aug 10:15A-11:43A
_COMPONENT_TEXT_RE = re.compile(
    r"(?P<airline>[A-Z]{2,5})\s*(?P<flight>[A-Z0-9]+)\s+"
    r"(?P<origin>[A-Z]{3})-(?P<destination>[A-Z]{3})"
    r"(?:\s+(?P<date>[0-9]{1,2}[A-Za-z]{3})\s+(?P<dep>[0-9]{1,2}:[0-9]{2}[AP])-(?P<arr>[0-9]{1,2}:[0-9]{2}[AP]))?",
)

# Key spellings used by stored components and older manual entries.
_RECORD_KEYS = {
    "airline": ("airline", "airline_iata", "airline_code", "carrier"),
    "flight_number": ("flight_number", "flightNumber", "number"),
    "origin": ("origin", "dep_iata", "from", "dep_airport"),
    "destination": ("destination", "arr_iata", "to", "arr_airport"),
    "date_raw": ("date_raw", "dateRaw"),
    "dep_time_raw": ("dep_time_raw", "depTimeRaw", "dep_time_local", "dep_time"),
    "arr_time_raw": ("arr_time_raw", "arrTimeRaw", "arr_time_local", "arr_time"),
    "day_offset": ("day_offset", "dayOffset", "arrival_plus_days"),
}


@dataclass(frozen=True)
class EnrichmentQuery:
    """Lookup key for the flight enrichment service (terminals, gates)."""
    flight_iata: str
    dep_iata: str
    arr_iata: str
    date_raw: str


def fare_to_cents(total_fare: Optional[float]) -> Optional[int]:
    """Convert a decimal fare to integer cents, rounding half up.

    A missing or zero fare stays unset.
    """
    if not total_fare:
        return None
    return int(math.floor(total_fare * 100 + 0.5))


def segment_navitas_text(segment: NavitasSegment) -> str:
    """Compact one-line text stored alongside a component."""
    return (
        f"{segment.airline} {segment.flight_number} {segment.route()} "
        f"{segment.date_raw} {segment.dep_time_raw}-{segment.arr_time_raw}"
    )


def enrichment_query(segment: NavitasSegment) -> EnrichmentQuery:
    return EnrichmentQuery(
        flight_iata=segment.flight_iata,
        dep_iata=segment.origin,
        arr_iata=segment.destination,
        date_raw=segment.date_raw,
    )


def build_option_record(
    option: NavitasOption,
    default_currency: str = DEFAULT_CURRENCY,
    fallback_name: Optional[str] = None,
) -> dict:
    """Build the ``options`` row for a parsed option."""
    return {
        "name": option.passenger or fallback_name or DEFAULT_OPTION_NAME,
        "description": f"Created from {option.source or SOURCE_NAVITAS} entry",
        "total_cost": fare_to_cents(option.total_fare),
        "currency": option.currency or default_currency,
        "reference": option.reference,
        "is_recommended": False,
        "is_available": True,
    }


def build_component_records(
    option: NavitasOption,
    enrichments: Optional[list[Optional[dict]]] = None,
) -> list[dict]:
    """Build one ``option_components`` row per segment, in segment order.

    Args:
        option: Parsed option.
        enrichments: Optional enrichment payloads aligned with
            ``option.segments`` (``None`` entries for legs with no data).
            Recognized keys: ``dep_terminal``, ``arr_terminal``, ``duration``.

    Raises:
        ValueError: If ``enrichments`` is not aligned with the segments.
    """
    if enrichments is not None and len(enrichments) != len(option.segments):
        raise ValueError(
            f"Expected {len(option.segments)} enrichment entries, got {len(enrichments)}"
        )

    records = []
    for index, segment in enumerate(option.segments):
        enrichment = enrichments[index] if enrichments else None
        terminal_gate = None
        if enrichment:
            terminal_gate = {
                "dep_terminal": enrichment.get("dep_terminal"),
                "arr_terminal": enrichment.get("arr_terminal"),
            }
        records.append({
            "component_order": index + 1,
            "navitas_text": segment_navitas_text(segment),
            "flight_number": segment.flight_number,
            "airline": segment.airline,
            "airline_iata": segment.airline,
            "dep_iata": segment.origin,
            "arr_iata": segment.destination,
            "date_raw": segment.date_raw,
            "dep_time_local": segment.dep_time_raw,
            "arr_time_local": segment.arr_time_raw,
            "day_offset": segment.day_offset,
            "stops": 0,
            "duration_minutes": enrichment.get("duration") if enrichment else None,
            "enriched_terminal_gate": terminal_gate,
        })
    return records


def _first(record: dict, field_name: str) -> Any:
    for key in _RECORD_KEYS[field_name]:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None


def segment_from_record(record: dict) -> Optional[NavitasSegment]:
    """Read a stored component (or similar dict) back into a segment.

    Structured fields win; ``navitas_text`` fills whatever is missing.
    Returns None when airline, flight number, origin or destination
    cannot be determined.
    """
    values = {name: _first(record, name) for name in _RECORD_KEYS}

    text = record.get("navitas_text")
    if text:
        m = _COMPONENT_TEXT_RE.match(str(text).strip())
        if m:
            fallback = {
                "airline": m.group("airline"),
                "flight_number": m.group("flight"),
                "origin": m.group("origin"),
                "destination": m.group("destination"),
                "date_raw": m.group("date"),
                "dep_time_raw": m.group("dep"),
                "arr_time_raw": m.group("arr"),
            }
            for name, value in fallback.items():
                if values[name] is None:
                    values[name] = value

    required = ("airline", "flight_number", "origin", "destination")
    if any(values[name] is None for name in required):
        return None

    try:
        day_offset = max(int(values["day_offset"] or 0), 0)
    except (TypeError, ValueError):
        day_offset = 0

    return NavitasSegment(
        airline=str(values["airline"]).upper(),
        flight_number=str(values["flight_number"]),
        date_raw=str(values["date_raw"] or ""),
        origin=str(values["origin"]).upper(),
        destination=str(values["destination"]).upper(),
        dep_time_raw=str(values["dep_time_raw"] or ""),
        arr_time_raw=str(values["arr_time_raw"] or ""),
        day_offset=day_offset,
    )
