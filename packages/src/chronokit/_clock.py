"""Monotonic clock port and system adapter.

Provides ClockPort (Protocol) and SystemClock for measuring elapsed time.

**Why monotonic?** ``time.monotonic_ns()`` is immune to NTP adjustments
and manual system-clock changes, making it suitable for measuring
elapsed durations. The epoch is arbitrary — only *differences* between
``now()`` calls are meaningful (PEP 418).

All readings are integer **milliseconds**, the resolution both engines
compute and display with.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Monotonic millisecond clock.

    The stopwatch and countdown engines never read time themselves;
    the driver samples a ``ClockPort`` once per action or refresh and
    passes the timestamp in. Tests inject a deterministic fake clock
    for reproducible timing.
    """

    def now(self) -> int:
        """Return monotonic time in milliseconds.

        Returns:
            An int of milliseconds from an arbitrary epoch.
            Only the *difference* between two calls is meaningful.
        """
        ...


class SystemClock:
    """Production clock wrapping ``time.monotonic_ns()``.

    Satisfies :class:`ClockPort` via structural subtyping — no
    base-class inheritance required (PEP 544).

    Usage::

        clock = SystemClock()
        start = clock.now()
        # ... some work ...
        elapsed_ms = clock.now() - start
    """

    def now(self) -> int:
        """Return monotonic time in milliseconds."""
        return time.monotonic_ns() // 1_000_000
