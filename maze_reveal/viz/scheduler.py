import heapq
import itertools
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class DelayScheduler(ABC):
    """'Call this back again after N milliseconds', nothing more."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        pass

    @abstractmethod
    def cancel(self, handle: Optional[int]) -> None:
        pass


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ClockScheduler(DelayScheduler):
    """
    Single-threaded timer queue. Nothing runs on its own: the owner polls
    run_pending() (once per frame in the window loop), which fires every
    callback whose due time has passed, in due order.
    """

    def __init__(self, clock: Callable[[], float] = _monotonic_ms):
        self.clock = clock
        self._queue: List[Tuple[float, int, int]] = []
        self._callbacks = {}
        self._ids = itertools.count(1)
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        due = self.clock() + max(0.0, delay_ms)
        self._callbacks[handle] = callback
        heapq.heappush(self._queue, (due, next(self._seq), handle))
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is None or self._callbacks.pop(handle, None) is None:
            return
        # Cancelled entries linger in the heap until due; compact once they dominate it
        if len(self._queue) > 2 * len(self._callbacks) + 16:
            self._queue[:] = [entry for entry in self._queue if entry[2] in self._callbacks]
            heapq.heapify(self._queue)

    def cancel_all(self) -> None:
        self._callbacks.clear()
        self._queue.clear()

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def run_pending(self) -> int:
        """
        Fires due callbacks one heap entry at a time. Callbacks scheduled with
        no delay during this pass wait for the next one. If a callback raises,
        entries not reached yet stay queued for the next pass.
        """
        now = self.clock()
        limit = next(self._seq)
        fired = 0
        queue = self._queue
        while queue and queue[0][0] <= now and queue[0][1] < limit:
            _, _, handle = heapq.heappop(queue)
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            fired += 1
            callback()
        return fired


def loop_with_delay(scheduler: DelayScheduler, on_loop: Callable[[int], None],
                    on_done: Callable[[], None], nb_loops: int, delay_ms: float) -> Callable[[], None]:
    """
    Calls on_loop(0) right away, then on_loop(1..nb_loops-1) every delay_ms,
    then on_done() one delay after the last loop. Returns a cancel function.
    """
    state = {"handle": None, "cancelled": False}

    def tick(i):
        if state["cancelled"]:
            return
        if i >= nb_loops:
            state["handle"] = None
            on_done()
            return
        on_loop(i)
        state["handle"] = scheduler.call_later(delay_ms, lambda: tick(i + 1))

    def cancel():
        state["cancelled"] = True
        scheduler.cancel(state["handle"])
        state["handle"] = None

    tick(0)
    return cancel
