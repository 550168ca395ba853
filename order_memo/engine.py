"""Draft order memo: quantities, customers and the confirm snapshot."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable

from order_memo.constant import MAX_QUANTITY, MIN_QUANTITY
from order_memo.data import MENU_ITEMS, find_menu_item
from order_memo.ids import generate_id
from order_memo.models import AddedNotice, ConfirmedOrder, DraftOrder, GroupedConfirmedOrder, MenuItem

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def clamp_quantity(quantity: int) -> int:
    return min(MAX_QUANTITY, max(MIN_QUANTITY, quantity))


def group_confirmed_orders(orders: Iterable[DraftOrder]) -> list[GroupedConfirmedOrder]:
    """Sum quantities per exact (drink, customer) pair in first-seen order."""
    totals: dict[tuple[str, str], int] = {}
    for order in orders:
        key = (order.drink, order.customer)
        totals[key] = totals.get(key, 0) + order.quantity
    return [
        GroupedConfirmedOrder(drink=drink, customer=customer, quantity=quantity)
        for (drink, customer), quantity in totals.items()
    ]


class OrderMemoEngine:
    """Owns draft and confirmed orders for one memo session.

    Every operation is synchronous and never raises on user input: failures come back
    as False/None and leave state unchanged. Timing (notice dismissal, press-and-hold
    repeat) and confirmation prompts belong to the caller.
    """

    def __init__(
        self,
        menu_items: Iterable[MenuItem] = MENU_ITEMS,
        id_generator: Callable[[str], str] = generate_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.menu_items: tuple[MenuItem, ...] = tuple(menu_items)
        self._id_generator = id_generator
        self._clock = clock
        self._orders: list[DraftOrder] = []
        self._confirmed: list[ConfirmedOrder] = []
        self.added_notice: AddedNotice | None = None

    @property
    def orders(self) -> tuple[DraftOrder, ...]:
        return tuple(self._orders)

    @property
    def confirmed_orders(self) -> tuple[ConfirmedOrder, ...]:
        return tuple(self._confirmed)

    @property
    def total_drinks(self) -> int:
        return sum(order.quantity for order in self._orders)

    @property
    def total_amount(self) -> int:
        return sum(order.quantity * order.price for order in self._orders)

    @property
    def confirmed_total_drinks(self) -> int:
        return sum(order.quantity for order in self._confirmed)

    @property
    def confirmed_total_amount(self) -> int:
        return sum(order.quantity * order.price for order in self._confirmed)

    @property
    def grouped_confirmed_orders(self) -> list[GroupedConfirmedOrder]:
        return group_confirmed_orders(self._confirmed)

    def find_order(self, order_id: str) -> DraftOrder | None:
        return next((order for order in self._orders if order.id == order_id), None)

    def add_order_from_menu(self, menu_id: int) -> DraftOrder | None:
        """Prepend a new draft for menu_id; unknown ids are ignored and return None."""
        selected = find_menu_item(menu_id, self.menu_items)
        if selected is None:
            logger.warning("add_order_ignored unknown menu_id=%r", menu_id)
            return None

        order = DraftOrder(
            id=self._id_generator("order"),
            drink=selected.name,
            price=selected.price,
            quantity=MIN_QUANTITY,
            customer="",
            created_at=self._clock(),
        )
        self._orders.insert(0, order)
        self.added_notice = AddedNotice(id=self._id_generator("notice"), name=selected.name)
        logger.info("order_added id=%s drink=%r", order.id, order.drink)
        return order

    def clear_added_notice(self) -> None:
        self.added_notice = None

    def increment_order_quantity(self, order_id: str, delta: int) -> bool:
        """Adjust quantity by delta within bounds; True when the result sits at the max."""
        reached_max = False
        for idx, order in enumerate(self._orders):
            if order.id != order_id:
                continue
            quantity = clamp_quantity(order.quantity + delta)
            reached_max = quantity == MAX_QUANTITY
            self._orders[idx] = replace(order, quantity=quantity)
        return reached_max

    def update_order_customer(self, order_id: str, customer: str) -> None:
        self._orders = [
            replace(order, customer=customer) if order.id == order_id else order for order in self._orders
        ]

    def clear_orders_by_customer(self, customer: str) -> None:
        self._orders = [
            replace(order, customer="") if order.customer == customer else order for order in self._orders
        ]

    def remove_order(self, order_id: str) -> None:
        self._orders = [order for order in self._orders if order.id != order_id]

    def reset_draft_orders(self) -> None:
        logger.info("draft_reset rows=%d", len(self._orders))
        self._orders = []

    def confirm_all_orders(self) -> bool:
        """Replace the confirmed set with a snapshot of the drafts; False when empty."""
        if not self._orders:
            return False

        confirmed_at = self._clock()
        self._confirmed = [ConfirmedOrder(**vars(order), confirmed_at=confirmed_at) for order in self._orders]
        logger.info("orders_confirmed rows=%d drinks=%d", len(self._confirmed), self.confirmed_total_drinks)
        return True
