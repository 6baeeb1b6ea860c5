"""Driver: composition root and refresh loop for both engines.

The :class:`Driver` builds one :class:`StopwatchEngine` and one
:class:`CountdownEngine`, owns the clock, alert sink and display, and
is the only caller of engine methods.  Every user action samples the
clock exactly once and hands that timestamp to the engine, then
redraws.

Typical usage::

    settings = Settings()
    driver = Driver.for_terminal(settings)
    driver.configure_countdown(0, 5, 0)
    driver.start_countdown()
    await driver.run_countdown(shutdown_event, stop_on_complete=True)

The periodic loops only decide *when* to redraw.  The values shown are
recomputed from the clock on every frame, so a slow loop produces
fewer frames, never wrong ones.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self, TextIO

from chronokit._alerts import AlertSink, TerminalAlertSink
from chronokit._clock import ClockPort, SystemClock
from chronokit._countdown import CountdownEngine
from chronokit._display import DisplayPort, TerminalDisplay
from chronokit._format import format_countdown, format_elapsed
from chronokit._settings import Settings
from chronokit._stopwatch import Lap, StopwatchEngine

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    """Which engine a key press is aimed at."""

    STOPWATCH = "stopwatch"
    COUNTDOWN = "countdown"


QUIT_KEY = "q"

# Blank input (a bare Enter) records a lap.
_STOPWATCH_KEYS: dict[str, str] = {
    "s": "toggle_stopwatch",
    "p": "pause_stopwatch",
    "r": "reset_stopwatch",
    "l": "record_lap",
    "": "record_lap",
}
_COUNTDOWN_KEYS: dict[str, str] = {
    "s": "toggle_countdown",
    "p": "pause_countdown",
    "r": "reset_countdown",
}


async def _sleep(seconds: float, shutdown_event: asyncio.Event) -> None:
    """Shutdown-aware sleep; returns early once *shutdown_event* is set."""
    sleep_task = asyncio.ensure_future(asyncio.sleep(seconds))
    shutdown_task = asyncio.ensure_future(shutdown_event.wait())

    _done, pending = await asyncio.wait(
        {sleep_task, shutdown_task},
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in pending:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


@dataclass
class Driver:
    """Owns both engines and connects them to clock, alerts and display.

    Args:
        clock: Monotonic millisecond clock sampled once per action/frame.
        alerts: Sink the countdown notifies on completion.
        display: Rendering surface for formatted output.
        settings: Refresh cadences, default countdown duration and
            alert texts.
    """

    clock: ClockPort
    alerts: AlertSink
    display: DisplayPort
    settings: Settings
    stopwatch: StopwatchEngine = field(init=False)
    countdown: CountdownEngine = field(init=False)
    _complete_shown: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.stopwatch = StopwatchEngine()
        self.countdown = CountdownEngine(
            alerts=self.alerts,
            alert_title=self.settings.alerts.title,
            alert_body=self.settings.alerts.body,
        )
        defaults = self.settings.countdown
        self.countdown.configure(defaults.hours, defaults.minutes, defaults.seconds)

    @classmethod
    def for_terminal(
        cls,
        settings: Settings,
        *,
        clock: ClockPort | None = None,
        stream: TextIO | None = None,
    ) -> Self:
        """Build a driver wired to the terminal adapters.

        Args:
            settings: Application settings; ``settings.alerts`` decides
                bell and desktop-notification behaviour.
            clock: Override clock.  Defaults to :class:`SystemClock`.
            stream: Output stream.  Defaults to ``sys.stdout``.
        """
        out = stream if stream is not None else sys.stdout
        alert_settings = settings.alerts
        return cls(
            clock=clock if clock is not None else SystemClock(),
            alerts=TerminalAlertSink(
                stream=out,
                bell=alert_settings.bell,
                beeps=alert_settings.beeps,
                notifications=alert_settings.notifications,
            ),
            display=TerminalDisplay(stream=out),
            settings=settings,
        )

    # --- Stopwatch actions -------------------------------------------------

    def start_stopwatch(self) -> None:
        now = self.clock.now()
        self.stopwatch.start(now)
        self.refresh_stopwatch(now)

    def pause_stopwatch(self) -> None:
        now = self.clock.now()
        self.stopwatch.pause(now)
        self.refresh_stopwatch(now)

    def toggle_stopwatch(self) -> None:
        now = self.clock.now()
        self.stopwatch.toggle(now)
        self.refresh_stopwatch(now)

    def reset_stopwatch(self) -> None:
        self.stopwatch.reset()
        self.display.clear_laps()
        self.refresh_stopwatch()

    def record_lap(self) -> Lap | None:
        """Capture a lap and add it to the display; ``None`` if stopped."""
        lap = self.stopwatch.lap(self.clock.now())
        if lap is not None:
            self.display.add_lap(lap.number, format_elapsed(lap.elapsed))
        return lap

    def refresh_stopwatch(self, now: int | None = None) -> str:
        """Render one stopwatch frame and return its text."""
        if now is None:
            now = self.clock.now()
        text = format_elapsed(self.stopwatch.elapsed(now))
        self.display.show_stopwatch(text)
        return text

    # --- Countdown actions -------------------------------------------------

    def configure_countdown(self, hours: int, minutes: int, seconds: int) -> None:
        """Set the countdown duration; ignored while the countdown runs."""
        if self.countdown.running:
            logger.debug("Countdown running, configuration ignored")
            return
        self.countdown.configure(hours, minutes, seconds)
        self._clear_complete()
        self.refresh_countdown()

    def start_countdown(self) -> None:
        now = self.clock.now()
        self.countdown.start(now)
        self.refresh_countdown(now)

    def pause_countdown(self) -> None:
        now = self.clock.now()
        self.countdown.pause(now)
        self.refresh_countdown(now)

    def toggle_countdown(self) -> None:
        if self.countdown.running:
            self.pause_countdown()
        else:
            self.start_countdown()

    def reset_countdown(self) -> None:
        self.countdown.reset()
        self._clear_complete()
        self.refresh_countdown()

    def refresh_countdown(self, now: int | None = None) -> str:
        """Tick the countdown, render one frame and return its text.

        The first frame that observes completion also raises the
        display's "complete" state; it stays raised until the
        countdown is reset or reconfigured.
        """
        if now is None:
            now = self.clock.now()
        self.countdown.tick(now)
        text = format_countdown(self.countdown.remaining)
        self.display.show_countdown(text)
        if self.countdown.completed and not self._complete_shown:
            self._complete_shown = True
            self.display.show_complete(self.settings.alerts.title)
        return text

    def _clear_complete(self) -> None:
        self._complete_shown = False
        self.display.clear_complete()

    # --- Keyboard ----------------------------------------------------------

    def handle_key(self, mode: Mode, key: str) -> bool:
        """Dispatch a key press to the engine selected by *mode*.

        Returns:
            ``False`` when the key asks to quit, ``True`` otherwise.
            Unknown keys are ignored.
        """
        normalized = key.strip().lower()
        if normalized == QUIT_KEY:
            return False
        keymap = _STOPWATCH_KEYS if mode is Mode.STOPWATCH else _COUNTDOWN_KEYS
        action_name = keymap.get(normalized)
        if action_name is None:
            logger.debug("Ignoring unknown %s key %r", mode, key)
            return True
        action: Callable[[], object] = getattr(self, action_name)
        action()
        return True

    # --- Refresh loops -----------------------------------------------------

    async def run_stopwatch(self, shutdown_event: asyncio.Event) -> None:
        """Redraw the stopwatch every refresh interval until shutdown."""
        interval = self.settings.stopwatch.refresh_interval
        while not shutdown_event.is_set():
            self.refresh_stopwatch()
            await _sleep(interval, shutdown_event)

    async def run_countdown(
        self,
        shutdown_event: asyncio.Event,
        *,
        stop_on_complete: bool = False,
    ) -> None:
        """Tick and redraw the countdown every refresh interval.

        Args:
            shutdown_event: Leaving the loop is the only cancellation;
                engine state is kept.
            stop_on_complete: Return as soon as the countdown completes.
        """
        interval = self.settings.countdown.refresh_interval
        while not shutdown_event.is_set():
            self.refresh_countdown()
            if stop_on_complete and self.countdown.completed:
                return
            await _sleep(interval, shutdown_event)
