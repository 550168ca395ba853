"""Editable static menu and storage constants."""

from __future__ import annotations

MIN_QUANTITY = 1
MAX_QUANTITY = 99

VISITORS_STORAGE_KEY = "bar_visitors"
VISITORS_PAYLOAD_VERSION = 1
ONE_YEAR_SECONDS = 31536000
COOKIE_PATH = "/"
COOKIE_SAMESITE = "lax"

# Browsers refuse cookies past roughly this size; the local store enforces the same bound.
MAX_STORED_VALUE_LENGTH = 4096

UNASSIGNED_CUSTOMER_LABEL = "(unassigned)"

# Canonical menu rows consumed by order_memo.data (which wraps these into MenuItem instances).
MENU_ITEMS_RAW: list[dict[str, str | int]] = [
    {"id": 1, "category": "ビール", "name": "ハイネケン", "price": 750},
    {"id": 2, "category": "ビール", "name": "コロナ", "price": 850},
    {"id": 3, "category": "ビール", "name": "ギネス", "price": 950},
    {"id": 4, "category": "ビール", "name": "生ビール", "price": 650},
    {"id": 5, "category": "カクテル", "name": "ハイボール", "price": 700},
    {"id": 6, "category": "カクテル", "name": "ジントニック", "price": 750},
    {"id": 7, "category": "カクテル", "name": "モスコミュール", "price": 800},
    {"id": 8, "category": "カクテル", "name": "カシスオレンジ", "price": 750},
    {"id": 9, "category": "カクテル", "name": "モヒート", "price": 900},
    {"id": 10, "category": "ウイスキー", "name": "ジャックダニエル", "price": 900},
    {"id": 11, "category": "ウイスキー", "name": "ジェムソン", "price": 850},
    {"id": 12, "category": "ウイスキー", "name": "山崎", "price": 1500},
    {"id": 13, "category": "ソフトドリンク", "name": "ウーロン茶", "price": 400},
    {"id": 14, "category": "ソフトドリンク", "name": "ジンジャーエール", "price": 450},
    {"id": 15, "category": "ソフトドリンク", "name": "コーラ", "price": 450},
]
