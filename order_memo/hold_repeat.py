"""Press-and-hold accelerated increment for the quantity button."""

from __future__ import annotations

from typing import Callable, Protocol

from order_memo.config import HOLD_REPEAT_INTERVAL_SECONDS, HOLD_START_DELAY_SECONDS


class TimerHandle(Protocol):
    def stop(self) -> None: ...


Schedule = Callable[[float, Callable[[], None]], TimerHandle]


class HoldRepeater:
    """Repeats ``step`` while a button is held, stopping once ``step`` reports the max.

    ``schedule(delay, callback)`` runs callback once after delay and returns a handle
    with ``stop()``; in the app it is ``App.set_timer``. The click a host fires when a
    hold gesture ends is swallowed so the hold does not count one extra.
    """

    def __init__(
        self,
        step: Callable[[str], bool],
        schedule: Schedule,
        start_delay: float = HOLD_START_DELAY_SECONDS,
        interval: float = HOLD_REPEAT_INTERVAL_SECONDS,
    ) -> None:
        self._step = step
        self._schedule = schedule
        self.start_delay = start_delay
        self.interval = interval
        self._timers: dict[str, TimerHandle] = {}
        self._suppress_click: set[str] = set()

    def is_holding(self, order_id: str) -> bool:
        return order_id in self._timers

    def press(self, order_id: str) -> None:
        self.release(order_id)
        # A new gesture drops a mark left by a hold that ended without a click.
        self._suppress_click.discard(order_id)
        self._timers[order_id] = self._schedule(self.start_delay, lambda: self._begin(order_id))

    def release(self, order_id: str) -> None:
        timer = self._timers.pop(order_id, None)
        if timer is not None:
            timer.stop()

    def click(self, order_id: str) -> bool:
        """Handle a plain click; returns whether a step was taken."""
        if order_id in self._suppress_click:
            self._suppress_click.discard(order_id)
            return False
        self._step(order_id)
        return True

    def stop_all(self) -> None:
        for order_id in list(self._timers):
            self.release(order_id)

    def _begin(self, order_id: str) -> None:
        self._timers.pop(order_id, None)
        self._suppress_click.add(order_id)
        if self._step(order_id):
            return
        self._timers[order_id] = self._schedule(self.interval, lambda: self._tick(order_id))

    def _tick(self, order_id: str) -> None:
        self._timers.pop(order_id, None)
        if self._step(order_id):
            return
        self._timers[order_id] = self._schedule(self.interval, lambda: self._tick(order_id))
