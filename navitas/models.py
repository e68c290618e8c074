"""Data models for parsed Navitas flight text."""

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

SOURCE_NAVITAS = "navitas"


@dataclass(frozen=True)
class NavitasSegment:
    """One flight leg within an option."""
    airline: str        # "AA", after alias normalization
    flight_number: str  # "2689", kept as text
    date_raw: str       # "10Aug", as written
    origin: str
    destination: str
    dep_time_raw: str   # "10:15A"
    arr_time_raw: str   # "11:43A"
    day_offset: int = 0

    @property
    def flight_iata(self) -> str:
        return f"{self.airline}{self.flight_number}"

    def route(self) -> str:
        """Return route as ORIGIN-DESTINATION."""
        return f"{self.origin}-{self.destination}"

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class NavitasOption:
    """One passenger's itinerary block."""
    raw: str
    segments: list[NavitasSegment] = field(default_factory=list)
    passenger: Optional[str] = None
    total_fare: Optional[float] = None
    currency: Optional[str] = None   # set together with total_fare
    reference: Optional[str] = None  # 6-char booking code
    source: str = SOURCE_NAVITAS
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "passenger": self.passenger,
            "total_fare": self.total_fare,
            "currency": self.currency,
            "reference": self.reference,
            "segments": [s.to_dict() for s in self.segments],
            "source": self.source,
            "raw": self.raw,
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class ParseResult:
    """Options found in a paste plus block-level errors."""
    options: list[NavitasOption] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        """Line-level soft errors of every option, prefixed by option number."""
        return [
            f"Option {i}: {err}"
            for i, option in enumerate(self.options, start=1)
            for err in option.errors
        ]

    @property
    def ok(self) -> bool:
        return bool(self.options) and not self.errors and not self.warnings

    def to_dict(self) -> dict:
        return {
            "options": [o.to_dict() for o in self.options],
            "errors": list(self.errors),
        }
