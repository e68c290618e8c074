"""SQLite log of Navitas pastes that have already been parsed.

Agents often paste the same itinerary twice; the CLI checks this log before
parsing and records each successful parse. Storage problems never break a
parse: they are logged and the store behaves as if empty.
"""

import hashlib
import logging
import sqlite3
import time
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path

from .models import ParseResult

logger = logging.getLogger(__name__)

HISTORY_DIR = Path.home() / ".navitas"
HISTORY_FILE = HISTORY_DIR / "history.db"

PREVIEW_LENGTH = 60


@dataclass
class HistoryEntry:
    """A previously parsed paste."""
    key: str
    preview: str
    option_count: int
    error_count: int
    parsed_at: float  # UNIX timestamp


def _get_conn() -> sqlite3.Connection:
    HISTORY_DIR.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(HISTORY_FILE)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS pastes (
            key           TEXT    PRIMARY KEY,
            preview       TEXT    NOT NULL,
            option_count  INTEGER NOT NULL,
            error_count   INTEGER NOT NULL,
            parsed_at     REAL    NOT NULL
        )
    """)
    conn.commit()
    return conn


def paste_key(text: str) -> str:
    """Stable key for a paste; surrounding whitespace is ignored."""
    return hashlib.sha256(text.strip().encode("utf-8")).hexdigest()


def _preview(text: str) -> str:
    first_line = text.strip().split("\n", 1)[0].strip()
    if len(first_line) > PREVIEW_LENGTH:
        return first_line[:PREVIEW_LENGTH - 1] + "…"
    return first_line


def seen(text: str) -> bool:
    """Return True if this paste was recorded before."""
    try:
        with closing(_get_conn()) as conn:
            row = conn.execute(
                "SELECT 1 FROM pastes WHERE key = ?", (paste_key(text),)
            ).fetchone()
        return row is not None
    except Exception as e:
        logger.warning(f"History lookup error: {e}")
        return False


def record(text: str, result: ParseResult) -> None:
    """Record a parsed paste, replacing any earlier entry for it."""
    error_count = len(result.errors) + len(result.warnings)
    try:
        with closing(_get_conn()) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO pastes "
                "(key, preview, option_count, error_count, parsed_at) VALUES (?, ?, ?, ?, ?)",
                (paste_key(text), _preview(text), len(result.options), error_count, time.time()),
            )
            conn.commit()
    except Exception as e:
        logger.warning(f"History record error: {e}")


def list_entries(limit: int = 20) -> list[HistoryEntry]:
    """Return the most recently parsed pastes, newest first."""
    try:
        with closing(_get_conn()) as conn:
            rows = conn.execute(
                "SELECT key, preview, option_count, error_count, parsed_at "
                "FROM pastes ORDER BY parsed_at DESC LIMIT ?",
                (limit,),
            ).fetchall()
    except Exception as e:
        logger.warning(f"History list error: {e}")
        return []
    return [HistoryEntry(*row) for row in rows]


def clear_all() -> int:
    """Delete every entry. Returns the number of removed entries."""
    try:
        with closing(_get_conn()) as conn:
            count = conn.execute("DELETE FROM pastes").rowcount
            conn.commit()
        return count
    except Exception as e:
        logger.warning(f"History clear error: {e}")
        return 0
