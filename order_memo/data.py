"""Static menu data."""

from __future__ import annotations

from typing import Iterable

from order_memo.constant import MENU_ITEMS_RAW
from order_memo.models import MenuItem

MENU_ITEMS: tuple[MenuItem, ...] = tuple(
    MenuItem(
        menu_id=int(row["id"]),
        category=str(row["category"]),
        name=str(row["name"]),
        price=int(row["price"]),
    )
    for row in MENU_ITEMS_RAW
)


def find_menu_item(menu_id: int, items: Iterable[MenuItem] = MENU_ITEMS) -> MenuItem | None:
    """Get a menu item by id."""
    for item in items:
        if item.menu_id == menu_id:
            return item
    return None


def group_menu_items_by_category(items: Iterable[MenuItem] = MENU_ITEMS) -> list[tuple[str, list[MenuItem]]]:
    """Group menu items by category, keeping first-seen category order."""
    grouped: dict[str, list[MenuItem]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(item)
    return list(grouped.items())
