from __future__ import annotations

import sqlite3

import pytest

from order_memo.constant import MAX_STORED_VALUE_LENGTH
from order_memo.storage import CookieAttributes, MemoryStore, SqliteCookieStore, StorageUnavailableError


def test_memory_store_round_trip_and_attributes():
    store = MemoryStore()
    store.write("k", "v", CookieAttributes())

    assert store.read("k") == "v"
    assert store.read("missing") is None
    assert store.attributes["k"] == CookieAttributes(path="/", max_age=31536000, samesite="lax")


def test_memory_store_can_simulate_disabled_storage():
    store = MemoryStore()
    store.fail_writes = True
    with pytest.raises(StorageUnavailableError):
        store.write("k", "v", CookieAttributes())

    store.fail_reads = True
    with pytest.raises(StorageUnavailableError):
        store.read("k")


def test_sqlite_store_persists_across_instances(tmp_path, clock):
    db_path = str(tmp_path / "nested" / "memo.db")
    store = SqliteCookieStore(db_path, clock=clock)
    store.bootstrap_schema()
    store.bootstrap_schema()
    store.write("bar_visitors", "first", CookieAttributes())
    store.write("bar_visitors", "second", CookieAttributes())

    reopened = SqliteCookieStore(db_path, clock=clock)
    assert reopened.read("bar_visitors") == "second"
    assert reopened.read("other") is None


def test_sqlite_store_expires_after_max_age(tmp_path, clock):
    store = SqliteCookieStore(str(tmp_path / "memo.db"), clock=clock)
    store.bootstrap_schema()
    store.write("k", "v", CookieAttributes(max_age=60))

    clock.advance(59)
    assert store.read("k") == "v"
    clock.advance(1)
    assert store.read("k") is None


def test_sqlite_store_refuses_oversized_value(tmp_path):
    store = SqliteCookieStore(str(tmp_path / "memo.db"))
    store.bootstrap_schema()

    with pytest.raises(StorageUnavailableError):
        store.write("k", "x" * MAX_STORED_VALUE_LENGTH, CookieAttributes())
    assert store.read("k") is None


def test_sqlite_store_without_schema_reports_unavailable(tmp_path):
    store = SqliteCookieStore(str(tmp_path / "memo.db"))
    with pytest.raises(StorageUnavailableError):
        store.read("k")


def _corrupt_row(db_path: str, **columns: object) -> None:
    conn = sqlite3.connect(db_path)
    with conn:
        for column, value in columns.items():
            conn.execute(f"UPDATE cookies SET {column} = ?", (value,))
    conn.close()


@pytest.mark.parametrize("expires_at", ["garbage", "", "20xx-13-45"])
def test_sqlite_store_treats_unreadable_expiry_as_missing(tmp_path, clock, expires_at):
    db_path = str(tmp_path / "memo.db")
    store = SqliteCookieStore(db_path, clock=clock)
    store.bootstrap_schema()
    store.write("k", "v", CookieAttributes())
    _corrupt_row(db_path, expires_at=expires_at)

    assert store.read("k") is None


def test_sqlite_store_reads_naive_expiry_as_utc(tmp_path, clock):
    db_path = str(tmp_path / "memo.db")
    store = SqliteCookieStore(db_path, clock=clock)
    store.bootstrap_schema()
    store.write("k", "v", CookieAttributes())

    _corrupt_row(db_path, expires_at="2030-01-01")
    assert store.read("k") == "v"

    _corrupt_row(db_path, expires_at="2020-01-01T00:00:00")
    assert store.read("k") is None


def test_sqlite_store_ignores_non_text_value(tmp_path, clock):
    db_path = str(tmp_path / "memo.db")
    store = SqliteCookieStore(db_path, clock=clock)
    store.bootstrap_schema()
    store.write("k", "v", CookieAttributes())
    _corrupt_row(db_path, value=b"\x00\x01")

    assert store.read("k") is None
