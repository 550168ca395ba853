from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from order_memo.engine import OrderMemoEngine
from order_memo.ids import IdGenerator
from order_memo.storage import MemoryStore


class FakeClock:
    """Deterministic clock advanced by hand."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 19, 21, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def counter_ids() -> IdGenerator:
    """Generator that always takes the fallback path, for readable ids."""
    return IdGenerator(uuid_factory=None, clock_ms=lambda: 1000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def engine(clock: FakeClock) -> OrderMemoEngine:
    return OrderMemoEngine(id_generator=counter_ids(), clock=clock)


@pytest.fixture
def ids() -> IdGenerator:
    return counter_ids()
