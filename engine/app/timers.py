from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional


@dataclass
class TimerHandle:
    due_ms: int
    callback: Callable[[int], None]
    interval_ms: Optional[int] = None  # None for one-shot timers
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled


class Scheduler:
    """
    Cooperative timers polled from the frame loop.

    Nothing here sleeps or spawns threads: the owning game calls run_due()
    once per frame with the current tick and every due callback runs inline,
    on the same thread that handles input events. Callbacks receive the tick
    they were fired at.

    A periodic timer fires at most once per run_due() call and re-arms from
    its previous due time, so a slow frame does not cause a burst of catch-up
    calls.
    """

    def __init__(self):
        self._timers: List[TimerHandle] = []

    def call_later(self, now_ms: int, delay_ms: int, callback: Callable[[int], None]) -> TimerHandle:
        handle = TimerHandle(due_ms=now_ms + max(0, int(delay_ms)), callback=callback)
        self._timers.append(handle)
        return handle

    def call_every(self, now_ms: int, interval_ms: int, callback: Callable[[int], None]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = TimerHandle(due_ms=now_ms + int(interval_ms),
                             callback=callback, interval_ms=int(interval_ms))
        self._timers.append(handle)
        return handle

    def cancel_all(self) -> None:
        for t in self._timers:
            t.cancel()
        self._timers = []

    def pending(self) -> int:
        return sum(1 for t in self._timers if t.active)

    def run_due(self, now_ms: int) -> int:
        """Fire every timer due at now_ms, in due order. Returns how many fired."""
        due = sorted((t for t in self._timers if t.active and t.due_ms <= now_ms),
                     key=lambda t: t.due_ms)
        fired = 0
        for t in due:
            # an earlier callback may have cancelled this one
            if t.cancelled:
                continue
            if t.interval_ms is None:
                t.cancelled = True
            else:
                t.due_ms += t.interval_ms
                if t.due_ms <= now_ms:
                    t.due_ms = now_ms + t.interval_ms
            t.callback(now_ms)
            fired += 1
        self._timers = [t for t in self._timers if t.active]
        return fired
