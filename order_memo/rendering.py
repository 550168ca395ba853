"""Rendering helpers for order rows and totals."""

from __future__ import annotations

from rich.text import Text

from order_memo.constant import UNASSIGNED_CUSTOMER_LABEL
from order_memo.models import DraftOrder, GroupedConfirmedOrder


def customer_label(customer: str) -> str:
    return customer or UNASSIGNED_CUSTOMER_LABEL


def customer_style(customer: str) -> str:
    """Return a consistent style for the customer tag."""
    if customer:
        return "bold #ffffff on #2f6db5"
    return "dim"


def format_order_row(order: DraftOrder) -> Text:
    """Render drink, quantity, line amount and customer tag for one draft."""
    text = Text()
    text.append(order.drink, style="bold")
    text.append(f"  x{order.quantity}")
    text.append(f"  ¥{order.price * order.quantity}", style="dim")
    text.append("  ")
    text.append(f" {customer_label(order.customer)} ", style=customer_style(order.customer))
    return text


def format_grouped_row(group: GroupedConfirmedOrder) -> Text:
    text = Text()
    text.append(group.drink, style="bold white")
    text.append(f"\n    {group.quantity} drinks / {customer_label(group.customer)}", style="white")
    return text


def format_totals(drinks: int, amount: int) -> str:
    return f"Total {drinks} drinks / ¥{amount}"
