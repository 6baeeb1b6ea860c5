"""Count-down timer engine with clamped configuration and completion alert.

The countdown is **deadline-based**: ``start`` fixes an absolute
deadline on the monotonic clock and every ``tick`` recomputes
``remaining = max(0, deadline - now)``. A late or skipped tick only
delays the display refresh; it never makes the timer run slow.

Completion is edge-triggered. The tick that first observes
``remaining == 0`` stops the timer, sets ``completed`` and dispatches
the alert; later ticks are no-ops until the timer is reset or
reconfigured and started again.

Timeline::

    configure(0, 0, 5)    total=remaining=5000
    start(now=0)          deadline=5000, running
    tick(now=4900)        remaining=100
    tick(now=5000)        remaining=0, completed, alert fired once
    tick(now=5100)        no-op
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chronokit._alerts import (
    DEFAULT_ALERT_BODY,
    DEFAULT_ALERT_TITLE,
    AlertSink,
    NullAlertSink,
    dispatch_alert,
)

logger = logging.getLogger(__name__)

MAX_HOURS = 99
MAX_MINUTES = 59
MAX_SECONDS = 59

_MS_PER_SECOND = 1000


def clamp_field(value: int, upper: int) -> int:
    """Clamp a configuration field into ``[0, upper]``."""
    return min(max(value, 0), upper)


@dataclass
class CountdownEngine:
    """Count-down timer.

    Args:
        alerts: Sink notified once per completion.
        alert_title: Notification title passed to the sink.
        alert_body: Notification body passed to the sink.
    """

    alerts: AlertSink = field(default_factory=NullAlertSink)
    alert_title: str = DEFAULT_ALERT_TITLE
    alert_body: str = DEFAULT_ALERT_BODY

    running: bool = field(default=False, init=False)
    completed: bool = field(default=False, init=False)
    hours: int = field(default=0, init=False)
    minutes: int = field(default=0, init=False)
    seconds: int = field(default=0, init=False)
    total: int = field(default=0, init=False)
    remaining: int = field(default=0, init=False)
    deadline: int | None = field(default=None, init=False, repr=False)

    # -- Configuration ------------------------------------------------------

    def configure(self, hours: int, minutes: int, seconds: int) -> None:
        """Set the target duration; ignored while running.

        Each field is clamped to its valid range (hours 0–99,
        minutes and seconds 0–59) before being combined.
        """
        if self.running:
            logger.debug("Countdown is running — configure ignored")
            return
        self.hours = clamp_field(hours, MAX_HOURS)
        self.minutes = clamp_field(minutes, MAX_MINUTES)
        self.seconds = clamp_field(seconds, MAX_SECONDS)
        total_seconds = self.hours * 3600 + self.minutes * 60 + self.seconds
        self.total = total_seconds * _MS_PER_SECOND
        self.remaining = self.total
        self.completed = False
        self.deadline = None
        logger.debug(
            "Countdown configured to %02d:%02d:%02d (%d ms)",
            self.hours,
            self.minutes,
            self.seconds,
            self.total,
        )

    # -- Transitions --------------------------------------------------------

    def start(self, now: int) -> None:
        """Start or resume toward a deadline ``remaining`` ms from *now*.

        No-op while running, when no duration is configured, or when
        the timer has already run out (reset or reconfigure first).
        """
        if self.running or self.total == 0 or self.remaining == 0:
            return
        self.deadline = now + self.remaining
        self.running = True
        logger.debug("Countdown started at %d ms, deadline %d ms", now, self.deadline)

    def pause(self, now: int) -> None:
        """Freeze the remaining duration until the next :meth:`start`.

        The timer is ticked first, so pausing at or after the deadline
        completes it instead.
        """
        if not self.running:
            return
        if self.tick(now):
            return
        self.running = False
        self.deadline = None
        logger.debug("Countdown paused with %d ms remaining", self.remaining)

    def reset(self) -> None:
        """Stop and restore the full configured duration."""
        self.running = False
        self.completed = False
        self.deadline = None
        self.remaining = self.total
        logger.debug("Countdown reset to %d ms", self.total)

    def tick(self, now: int) -> bool:
        """Recompute ``remaining`` from the deadline.

        Returns:
            ``True`` only for the call that completed the countdown.
        """
        if not self.running or self.deadline is None:
            return False
        self.remaining = max(0, self.deadline - now)
        if self.remaining > 0:
            return False
        self._complete()
        return True

    # -- Internal -----------------------------------------------------------

    def _complete(self) -> None:
        self.running = False
        self.completed = True
        self.deadline = None
        logger.info("Countdown complete (%d ms)", self.total)
        dispatch_alert(self.alerts, self.alert_title, self.alert_body)
