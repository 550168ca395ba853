"""Identifier generation for domain records."""

from __future__ import annotations

import time
from typing import Callable
from uuid import uuid4

UuidFactory = Callable[[], "str | None"]


def system_uuid() -> str | None:
    """Return a random uuid, or None when the host has no randomness source."""
    try:
        return str(uuid4())
    except NotImplementedError:
        return None


def _now_ms() -> int:
    return int(time.time() * 1000)


class IdGenerator:
    """Produces ids that never repeat for the lifetime of the instance."""

    def __init__(self, uuid_factory: UuidFactory | None = system_uuid, clock_ms: Callable[[], int] = _now_ms) -> None:
        self._uuid_factory = uuid_factory
        self._clock_ms = clock_ms
        self._counter = 0

    def generate(self, prefix: str = "id") -> str:
        if self._uuid_factory is not None:
            uuid = self._uuid_factory()
            if uuid:
                return uuid

        # The counter keeps ids distinct within one clock tick.
        self._counter += 1
        return f"{prefix}-{self._clock_ms()}-{self._counter}"

    __call__ = generate


default_generator = IdGenerator()
generate_id = default_generator.generate
