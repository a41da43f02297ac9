"""Host-driven trailing debounce.

Writes to the same key within ``window`` seconds collapse into the most
recent value; a key settles once ``window`` seconds pass without a new write.
Nothing here owns a timer: callers pass ``now`` and call :meth:`poll`.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class _Pending(Generic[V]):
    value: V
    deadline: float
    seq: int


class TrailingDebouncer(Generic[K, V]):
    """Coalesce rapid writes per key and deliver only the settled value."""

    def __init__(
        self,
        window: float,
        on_settle: Callable[[K, V], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not math.isfinite(window) or window < 0:
            raise ValueError("window must be >= 0")
        self._window = window
        self._on_settle = on_settle
        self._clock = clock
        self._pending: dict[K, _Pending[V]] = {}
        self._seq = 0

    @property
    def window(self) -> float:
        return self._window

    def pending_keys(self) -> tuple[K, ...]:
        return tuple(self._pending)

    def submit(self, key: K, value: V, now: float | None = None) -> None:
        """Record ``value`` for ``key``, replacing any unsettled value and restarting its window."""
        at = self._clock() if now is None else now
        self._seq += 1
        self._pending[key] = _Pending(value=value, deadline=at + self._window, seq=self._seq)

    def poll(self, now: float | None = None) -> list[K]:
        """Deliver every key whose window has elapsed, oldest write first."""
        at = self._clock() if now is None else now
        due = [(p.seq, key) for key, p in self._pending.items() if p.deadline <= at]
        return self._deliver(sorted(due))

    def flush(self) -> list[K]:
        """Deliver everything pending regardless of deadlines."""
        return self._deliver(sorted((p.seq, key) for key, p in self._pending.items()))

    def cancel(self) -> None:
        """Drop all pending writes without delivering them."""
        self._pending.clear()

    def _deliver(self, ordered: list[tuple[int, K]]) -> list[K]:
        delivered: list[K] = []
        for _, key in ordered:
            pending = self._pending.pop(key)
            self._on_settle(key, pending.value)
            delivered.append(key)
        return delivered
