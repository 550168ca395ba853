from __future__ import annotations

import json
from urllib.parse import quote, unquote

import pytest

from order_memo.constant import VISITORS_STORAGE_KEY
from order_memo.models import Visitor
from order_memo.storage import CookieAttributes, MemoryStore
from order_memo.visitor_codec import (
    decode_visitors,
    encode_visitors,
    normalize_visitors,
    read_visitors,
    write_visitors,
)


def _escaped(value: object) -> str:
    return quote(json.dumps(value, ensure_ascii=False), safe="")


def test_encode_writes_versioned_escaped_json():
    encoded = encode_visitors([Visitor(id="v1", name="A卓")])

    assert "%" in encoded
    assert "{" not in encoded
    assert json.loads(unquote(encoded)) == {"version": 1, "visitors": [{"id": "v1", "name": "A卓"}]}


def test_round_trip_preserves_order():
    visitors = [Visitor(id="v2", name="B卓"), Visitor(id="v1", name="A卓"), Visitor(id="v3", name="カウンター")]
    assert decode_visitors(encode_visitors(visitors)) == visitors


@pytest.mark.parametrize("raw", [None, ""])
def test_missing_or_empty_value_decodes_to_empty(raw):
    assert decode_visitors(raw) == []


@pytest.mark.parametrize("raw", ["not-json", "%7B%22version%22", "%E0%A4%A", "%FF%FE", "[" * 5000])
def test_corrupt_payload_decodes_to_empty(raw):
    assert decode_visitors(raw) == []


@pytest.mark.parametrize(
    "raw",
    [
        # Otherwise valid legacy array whose name carries a stray "%zz".
        "%5B%7B%22id%22%3A%22v1%22%2C%22name%22%3A%22A%zz%22%7D%5D",
        # Bare "%" at the end of a name.
        "%5B%7B%22id%22%3A%22v1%22%2C%22name%22%3A%22100%%22%7D%5D",
        "%5B%7B%22id%22%3A%22v1%22%2C%22name%22%3A%22A%22%7D%5D%4",
    ],
)
def test_malformed_percent_escape_decodes_to_empty(raw):
    assert decode_visitors(raw) == []


def test_legacy_bare_array_payload():
    raw = _escaped([{"id": "v1", "name": "A卓"}])
    assert decode_visitors(raw) == [Visitor(id="v1", name="A卓")]


@pytest.mark.parametrize(
    "payload",
    [
        {"version": 2, "visitors": [{"id": "v1", "name": "A"}]},
        {"version": True, "visitors": [{"id": "v1", "name": "A"}]},
        {"version": "1", "visitors": [{"id": "v1", "name": "A"}]},
        {"visitors": [{"id": "v1", "name": "A"}]},
        "just a string",
        42,
        None,
    ],
)
def test_unrecognized_shapes_decode_to_empty(payload):
    assert decode_visitors(_escaped(payload)) == []


def test_version_one_as_float_is_accepted():
    raw = _escaped({"version": 1.0, "visitors": [{"id": "v1", "name": "A"}]})
    assert decode_visitors(raw) == [Visitor(id="v1", name="A")]


def test_v1_with_non_list_visitors_decodes_to_empty():
    assert decode_visitors(_escaped({"version": 1, "visitors": {"id": "v1"}})) == []


def test_normalize_trims_and_drops_untrusted_entries():
    value = [
        {"id": " v1 ", "name": "  A卓  "},
        {"id": "v1", "name": "duplicate id"},
        {"id": "", "name": "no id"},
        {"id": "v2", "name": "   "},
        {"id": 3, "name": "numeric id"},
        {"id": "v4"},
        "not a record",
        ["v5", "list"],
        None,
        {"id": "v6", "name": "F卓", "extra": True},
    ]

    assert normalize_visitors(value) == [Visitor(id="v1", name="A卓"), Visitor(id="v6", name="F卓")]


def test_normalize_non_list_is_empty():
    assert normalize_visitors({"id": "v1", "name": "A"}) == []


def test_write_then_read_through_store():
    store = MemoryStore()
    assert write_visitors(store, [Visitor(id="v1", name="A卓")]) is True

    assert store.attributes[VISITORS_STORAGE_KEY] == CookieAttributes()
    assert read_visitors(store) == [Visitor(id="v1", name="A卓")]


def test_write_failure_is_absorbed():
    store = MemoryStore()
    store.fail_writes = True
    assert write_visitors(store, [Visitor(id="v1", name="A")]) is False
    assert store.values == {}


def test_read_failure_is_absorbed():
    store = MemoryStore({VISITORS_STORAGE_KEY: encode_visitors([Visitor(id="v1", name="A")])})
    store.fail_reads = True
    assert read_visitors(store) == []
