"""Domain models for order-memo."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MenuItem:
    """A drink on the static menu."""

    menu_id: int
    category: str
    name: str
    price: int


@dataclass(frozen=True)
class DraftOrder:
    """An uncommitted order line; replaced by id whenever it changes."""

    id: str
    drink: str
    price: int
    quantity: int
    customer: str
    created_at: datetime


@dataclass(frozen=True)
class ConfirmedOrder(DraftOrder):
    """A draft order snapshot taken at confirmation time."""

    confirmed_at: datetime


@dataclass(frozen=True)
class GroupedConfirmedOrder:
    """Confirmed quantity summed per (drink, customer) pair."""

    drink: str
    customer: str
    quantity: int


@dataclass(frozen=True)
class Visitor:
    """A named table or group usable as an order's customer."""

    id: str
    name: str


@dataclass(frozen=True)
class AddedNotice:
    """Transient notice that a menu item was just added."""

    id: str
    name: str
