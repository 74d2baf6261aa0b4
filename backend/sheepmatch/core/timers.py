"""Epoch-guarded deferred callbacks."""
import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(order=True)
class DeferredCall:
    """A callback due at a clock time, bound to the epoch it was scheduled in."""
    due: float
    seq: int
    epoch: int = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class DeferredQueue:
    """Single-threaded timer queue pumped by its owner.

    Nothing runs on its own: callbacks fire from ``run_due``, which the owner
    calls whenever an event arrives. A callback whose epoch no longer matches
    the owner's current epoch is dropped instead of run.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: List[DeferredCall] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._entries)

    def call_later(self, delay_s: float, epoch: int, callback: Callable[[], None]) -> DeferredCall:
        """Schedule ``callback`` to run ``delay_s`` seconds from now."""
        entry = DeferredCall(
            due=self._clock() + delay_s,
            seq=next(self._seq),
            epoch=epoch,
            callback=callback,
        )
        heapq.heappush(self._entries, entry)
        return entry

    def run_due(self, current_epoch: int, now: Optional[float] = None) -> int:
        """
        Run every callback whose due time has passed.

        Args:
            current_epoch: Epoch of the owner's live level.
            now: Clock value to compare against (defaults to the clock).

        Returns:
            Number of callbacks actually run.
        """
        if now is None:
            now = self._clock()

        fired = 0
        while self._entries and self._entries[0].due <= now:
            entry = heapq.heappop(self._entries)
            if entry.epoch != current_epoch:
                logger.debug(f"Dropping stale deferred call from epoch {entry.epoch}")
                continue
            entry.callback()
            fired += 1

        return fired

    def clear(self) -> None:
        self._entries.clear()
