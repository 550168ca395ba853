"""Versioned encode/decode of the visitor list to durable storage.

The stored value is shared, user-editable and written by several app builds, so
decoding never raises: anything it cannot trust is dropped and an empty or partial
list comes back instead. Two shapes are accepted:

* legacy: a bare JSON array of ``{"id", "name"}`` records
* v1: ``{"version": 1, "visitors": [...]}``
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable
from urllib.parse import quote, unquote

from order_memo.constant import VISITORS_PAYLOAD_VERSION, VISITORS_STORAGE_KEY
from order_memo.models import Visitor
from order_memo.storage import CookieAttributes, KeyValueStore, StorageUnavailableError

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves unescaped.
_URI_COMPONENT_SAFE = "-_.!~*'()"
# A '%' that does not start a two-hex-digit escape.
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def normalize_visitors(value: Any) -> list[Visitor]:
    """Keep record-shaped entries with non-empty trimmed id/name; first id wins."""
    if not isinstance(value, list):
        return []

    normalized: list[Visitor] = []
    seen_ids: set[str] = set()
    for item in value:
        if not isinstance(item, dict):
            continue

        raw_id = item.get("id")
        raw_name = item.get("name")
        visitor_id = raw_id.strip() if isinstance(raw_id, str) else ""
        name = raw_name.strip() if isinstance(raw_name, str) else ""
        if not visitor_id or not name or visitor_id in seen_ids:
            continue

        seen_ids.add(visitor_id)
        normalized.append(Visitor(id=visitor_id, name=name))
    return normalized


def _is_supported_version(version: Any) -> bool:
    if isinstance(version, bool) or not isinstance(version, (int, float)):
        return False
    return version == VISITORS_PAYLOAD_VERSION


def _parse_stored_visitors(parsed: Any) -> list[Visitor]:
    if isinstance(parsed, list):
        return normalize_visitors(parsed)

    if not isinstance(parsed, dict):
        return []
    if not _is_supported_version(parsed.get("version")):
        logger.warning("visitor payload has unsupported version %r", parsed.get("version"))
        return []
    return normalize_visitors(parsed.get("visitors"))


def _decode_uri_component(raw: str) -> str:
    """Percent-decode like decodeURIComponent: malformed escapes and bad UTF-8 raise ValueError."""
    bad = _BAD_PERCENT_ESCAPE.search(raw)
    if bad is not None:
        raise ValueError(f"malformed percent escape at offset {bad.start()}")
    return unquote(raw, errors="strict")


def encode_visitors(visitors: Iterable[Visitor]) -> str:
    """Return the escaped v1 JSON document for the full visitor list."""
    payload = {
        "version": VISITORS_PAYLOAD_VERSION,
        "visitors": [{"id": visitor.id, "name": visitor.name} for visitor in visitors],
    }
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return quote(text, safe=_URI_COMPONENT_SAFE)


def decode_visitors(raw: str | None) -> list[Visitor]:
    """Decode a stored value; missing, corrupt or unknown payloads yield []."""
    if not raw:
        return []

    try:
        parsed = json.loads(_decode_uri_component(raw))
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueError.
        logger.warning("discarding unreadable visitor payload: %s", exc)
        return []
    return _parse_stored_visitors(parsed)


def read_visitors(store: KeyValueStore, key: str = VISITORS_STORAGE_KEY) -> list[Visitor]:
    try:
        raw = store.read(key)
    except StorageUnavailableError as exc:
        logger.warning("visitor storage unavailable on read: %s", exc)
        return []
    return decode_visitors(raw)


def write_visitors(store: KeyValueStore, visitors: Iterable[Visitor], key: str = VISITORS_STORAGE_KEY) -> bool:
    """Write the full visitor list; returns False when the store refused it."""
    try:
        store.write(key, encode_visitors(visitors), CookieAttributes())
    except StorageUnavailableError as exc:
        logger.warning("visitor storage unavailable on write: %s", exc)
        return False
    return True
