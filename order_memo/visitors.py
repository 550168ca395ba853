"""Visitor registry backed by the persistent codec."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from order_memo.ids import generate_id
from order_memo.models import Visitor
from order_memo.storage import KeyValueStore
from order_memo.visitor_codec import read_visitors, write_visitors

logger = logging.getLogger(__name__)


class VisitorError(Enum):
    """Reasons a visitor could not be added."""

    EMPTY_NAME = "Please enter a visitor name."
    DUPLICATE_NAME = "A visitor with the same name already exists."

    @property
    def message(self) -> str:
        return self.value


class VisitorRegistry:
    """Unique-by-name visitors, written through to storage on every change."""

    def __init__(
        self,
        store: KeyValueStore,
        id_generator: Callable[[str], str] = generate_id,
        on_visitor_removed: Callable[[str], None] | None = None,
    ) -> None:
        self._store = store
        self._id_generator = id_generator
        self.on_visitor_removed = on_visitor_removed
        self._visitors: list[Visitor] = read_visitors(store)
        self.pending_name = ""
        self.error: VisitorError | None = None
        logger.info("visitor registry loaded visitors=%d", len(self._visitors))

    @property
    def visitors(self) -> tuple[Visitor, ...]:
        return tuple(self._visitors)

    @property
    def error_message(self) -> str:
        return self.error.message if self.error is not None else ""

    def set_pending_name(self, text: str) -> None:
        self.pending_name = text

    def add_visitor(self, raw_name: str | None = None) -> VisitorError | None:
        """Add a visitor from raw_name (or the pending input); returns the error, if any."""
        name = (self.pending_name if raw_name is None else raw_name).strip()

        if not name:
            self.error = VisitorError.EMPTY_NAME
            return self.error
        if any(visitor.name == name for visitor in self._visitors):
            self.error = VisitorError.DUPLICATE_NAME
            return self.error

        visitor = Visitor(id=self._id_generator("visitor"), name=name)
        self._visitors.append(visitor)
        self.pending_name = ""
        self.error = None
        logger.info("visitor_added id=%s name=%r", visitor.id, visitor.name)
        self._flush()
        return None

    def remove_visitor(self, visitor_id: str) -> Visitor | None:
        removed = next((visitor for visitor in self._visitors if visitor.id == visitor_id), None)
        if removed is None:
            return None

        self._visitors = [visitor for visitor in self._visitors if visitor.id != visitor_id]
        logger.info("visitor_removed id=%s name=%r", removed.id, removed.name)
        self._flush()
        if self.on_visitor_removed is not None:
            self.on_visitor_removed(removed.name)
        return removed

    def _flush(self) -> None:
        write_visitors(self._store, self._visitors)
