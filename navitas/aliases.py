"""Spelled-out carrier and flight-number aliases seen in Navitas pastes.

Some agents' systems spell codes out letter-by-letter ("BATWO EIGHTZEROZERO"
for BA 800). The tables below only cover tokens observed in real pastes;
there is no general spelled-digit decoder. Unknown spelled-out
flight numbers pass through unchanged and are logged so they can be added.
"""

import logging
import re

logger = logging.getLogger(__name__)

AIRLINE_ALIASES = {
    "BATWO": "BA",
}

FLIGHT_NUMBER_ALIASES = {
    "EIGHTZEROZERO": "800",
    "FOURFIVETHREE": "453",
    "FOURONETWO": "412",
    "SEVENFIVE": "75",
}

DIGIT_WORDS = (
    "ZERO", "ONE", "TWO", "THREE", "FOUR",
    "FIVE", "SIX", "SEVEN", "EIGHT", "NINE",
)

_SPELLED_RE = re.compile(r"(?:%s)+" % "|".join(DIGIT_WORDS))


def is_spelled_out(token: str) -> bool:
    """True if *token* is made only of spelled digit words (e.g. "ONETWO")."""
    return bool(token) and _SPELLED_RE.fullmatch(token) is not None


def normalize_airline(code: str) -> str:
    return AIRLINE_ALIASES.get(code, code)


def normalize_flight_number(token: str) -> str:
    """Map a spelled-out flight number to digits using the closed table."""
    if token in FLIGHT_NUMBER_ALIASES:
        return FLIGHT_NUMBER_ALIASES[token]
    if is_spelled_out(token):
        logger.warning(f"Unmapped spelled-out flight number: {token}")
    return token
