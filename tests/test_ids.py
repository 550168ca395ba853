from __future__ import annotations

from order_memo.ids import IdGenerator, generate_id


def test_uses_uuid_factory_when_available():
    gen = IdGenerator(uuid_factory=lambda: "abc-123")
    assert gen.generate("order") == "abc-123"


def test_default_generator_yields_distinct_ids():
    ids = {generate_id("order") for _ in range(500)}
    assert len(ids) == 500


def test_fallback_is_distinct_within_one_clock_tick():
    gen = IdGenerator(uuid_factory=lambda: None, clock_ms=lambda: 1700000000000)
    first = gen.generate("visitor")
    second = gen.generate("visitor")

    assert first == "visitor-1700000000000-1"
    assert second == "visitor-1700000000000-2"


def test_fallback_counter_is_per_instance():
    a = IdGenerator(uuid_factory=None, clock_ms=lambda: 5)
    b = IdGenerator(uuid_factory=None, clock_ms=lambda: 5)
    a.generate()
    a.generate()

    assert b.generate() == "id-5-1"
    assert a.generate() == "id-5-3"


def test_empty_uuid_falls_back():
    gen = IdGenerator(uuid_factory=lambda: "", clock_ms=lambda: 7)
    assert gen("notice") == "notice-7-1"
