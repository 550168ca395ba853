"""Cookie-style key-value storage for small client-side state."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Protocol

from order_memo.constant import COOKIE_PATH, COOKIE_SAMESITE, MAX_STORED_VALUE_LENGTH, ONE_YEAR_SECONDS

logger = logging.getLogger(__name__)


class StorageUnavailableError(Exception):
    """The backing store cannot be read or written."""


@dataclass(frozen=True)
class CookieAttributes:
    """Attributes stored alongside a value."""

    path: str = COOKIE_PATH
    max_age: int = ONE_YEAR_SECONDS
    samesite: str = COOKIE_SAMESITE


class KeyValueStore(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str, attrs: CookieAttributes) -> None: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_expiry(raw: object) -> datetime | None:
    """Parse a stored expiry; naive timestamps are UTC, anything unreadable is None."""
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class MemoryStore:
    """In-memory store; set fail_reads/fail_writes to simulate a disabled store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.attributes: dict[str, CookieAttributes] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0

    def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageUnavailableError("reads disabled")
        return self.values.get(key)

    def write(self, key: str, value: str, attrs: CookieAttributes) -> None:
        if self.fail_writes:
            raise StorageUnavailableError("writes disabled")
        self.values[key] = value
        self.attributes[key] = attrs
        self.write_count += 1


class SqliteCookieStore:
    """SQLite-backed store honouring max-age expiry and the cookie size bound."""

    def __init__(self, db_path: str, clock: Callable[[], datetime] = _utc_now) -> None:
        self.db_path = db_path
        self._clock = clock

    def _connect(self) -> sqlite3.Connection:
        db_file = Path(self.db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(db_file)

    def bootstrap_schema(self) -> None:
        """Create the cookie table if it does not already exist."""
        try:
            with self._connect() as conn:
                conn.executescript(
                    """
                    CREATE TABLE IF NOT EXISTS cookies (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        path TEXT NOT NULL,
                        samesite TEXT NOT NULL,
                        expires_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    );
                    """
                )
        except (sqlite3.Error, OSError) as exc:
            raise StorageUnavailableError(str(exc)) from exc

    def read(self, key: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT value, expires_at FROM cookies WHERE key = ?", (key,)).fetchone()
        except (sqlite3.Error, OSError) as exc:
            raise StorageUnavailableError(str(exc)) from exc

        if row is None:
            return None
        value, expires_at = row
        expiry = _parse_expiry(expires_at)
        if expiry is None or not isinstance(value, str):
            logger.warning("ignoring unreadable cookie row %r expires_at=%r", key, expires_at)
            return None
        if expiry <= self._clock():
            return None
        return value

    def write(self, key: str, value: str, attrs: CookieAttributes) -> None:
        if len(key) + len(value) + 1 > MAX_STORED_VALUE_LENGTH:
            raise StorageUnavailableError(f"value for {key!r} exceeds {MAX_STORED_VALUE_LENGTH} characters")

        now = self._clock()
        expires_at = now + timedelta(seconds=attrs.max_age)
        try:
            with self._connect() as conn:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO cookies (key, value, path, samesite, expires_at, updated_at)
                        VALUES (?, ?, ?, ?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            path = excluded.path,
                            samesite = excluded.samesite,
                            expires_at = excluded.expires_at,
                            updated_at = excluded.updated_at
                        """,
                        (key, value, attrs.path, attrs.samesite, expires_at.isoformat(), now.isoformat()),
                    )
        except (sqlite3.Error, OSError) as exc:
            raise StorageUnavailableError(str(exc)) from exc
