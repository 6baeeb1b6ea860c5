"""Count-up stopwatch engine with pause/resume and laps.

The engine is a pure function of the timestamps handed to it: every
operation that depends on time takes ``now`` (milliseconds from a
:class:`~chronokit._clock.ClockPort`) as an argument. Elapsed time is
always recomputed as a clock delta, never accumulated per refresh, so
scheduling jitter in the driver affects only how often the display is
redrawn, not the value shown.

Invalid-state calls (``start`` while running, ``pause``/``lap`` while
stopped) are silent no-ops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Lap:
    """A single lap capture.

    Attributes:
        number: 1-based capture index since the last reset.
        elapsed: Stopwatch elapsed milliseconds at capture time.
    """

    number: int
    elapsed: int


@dataclass
class StopwatchEngine:
    """Count-up accumulator.

    Usage::

        sw = StopwatchEngine()
        sw.start(now=0)
        sw.elapsed(now=1500)   # 1500
        sw.pause(now=1500)
        sw.start(now=3000)     # resumes without a jump
        sw.elapsed(now=4000)   # 2500
    """

    running: bool = field(default=False, init=False)
    start_epoch: int = field(default=0, init=False)
    accumulated: int = field(default=0, init=False)
    _laps: list[int] = field(default_factory=list, init=False, repr=False)

    # -- Queries ------------------------------------------------------------

    def elapsed(self, now: int) -> int:
        """Return elapsed milliseconds at *now* without mutating state."""
        if self.running:
            return now - self.start_epoch
        return self.accumulated

    @property
    def laps(self) -> tuple[int, ...]:
        """Lap values in capture (chronological) order."""
        return tuple(self._laps)

    @property
    def laps_newest_first(self) -> tuple[int, ...]:
        """Lap values in display order, most recent first."""
        return tuple(reversed(self._laps))

    # -- Transitions --------------------------------------------------------

    def start(self, now: int) -> None:
        """Start or resume counting from the accumulated value."""
        if self.running:
            return
        self.start_epoch = now - self.accumulated
        self.running = True
        logger.debug(
            "Stopwatch started at %d ms (resuming from %d ms)",
            now,
            self.accumulated,
        )

    def pause(self, now: int) -> None:
        """Freeze the elapsed value until the next :meth:`start`."""
        if not self.running:
            return
        self.accumulated = max(0, now - self.start_epoch)
        self.running = False
        logger.debug("Stopwatch paused at %d ms elapsed", self.accumulated)

    def toggle(self, now: int) -> None:
        """Pause when running, otherwise start."""
        if self.running:
            self.pause(now)
        else:
            self.start(now)

    def reset(self) -> None:
        """Stop and discard the accumulated time and all laps."""
        self.running = False
        self.start_epoch = 0
        self.accumulated = 0
        self._laps.clear()
        logger.debug("Stopwatch reset")

    def lap(self, now: int) -> Lap | None:
        """Record the current elapsed value as a lap.

        Returns:
            The recorded :class:`Lap`, or ``None`` when the stopwatch
            is not running.
        """
        if not self.running:
            return None
        value = now - self.start_epoch
        self._laps.append(value)
        lap = Lap(number=len(self._laps), elapsed=value)
        logger.debug("Lap %d recorded at %d ms", lap.number, lap.elapsed)
        return lap
