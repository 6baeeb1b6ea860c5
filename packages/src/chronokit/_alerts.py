"""Completion alert port and adapters.

Provides AlertSink (Protocol) and three implementations:

- TerminalAlertSink — terminal bell plus an optional desktop notification
- MockAlertSink — test double that records calls
- NullAlertSink — silent no-op adapter

Alert delivery is **fire-and-forget**: :func:`dispatch_alert` calls
both halves of the port independently and logs any failure, so a
broken speaker or a missing notification daemon can never change the
countdown's state or crash the refresh loop.

Whether desktop notifications are allowed at all is a permission the
driver grants when it builds the sink (``notifications=True``); the
countdown engine never asks.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Protocol, TextIO, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_ALERT_TITLE = "Timer Complete!"
DEFAULT_ALERT_BODY = "Your countdown timer has finished."

_BELL = "\a"
_NOTIFY_SEND = "notify-send"

# ---------------------------------------------------------------------------
# Port (Protocol)
# ---------------------------------------------------------------------------


@runtime_checkable
class AlertSink(Protocol):
    """Port contract for completion alerts.

    Both methods must return promptly; long-running work (playing a
    sound file, talking to a notification daemon) belongs in a
    background process or thread owned by the adapter.
    """

    def play_alert(self) -> None: ...

    def notify(self, title: str, body: str) -> None: ...


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def dispatch_alert(sink: AlertSink, title: str, body: str) -> bool:
    """Deliver a completion alert, isolating every failure.

    The audio cue and the notification are attempted independently:
    a failing ``play_alert`` does not prevent ``notify``.

    Args:
        sink: The alert adapter.
        title: Notification title.
        body: Notification body text.

    Returns:
        ``True`` when both calls succeeded.
    """
    ok = True
    try:
        sink.play_alert()
    except Exception:
        logger.exception("Could not play alert sound")
        ok = False
    try:
        sink.notify(title, body)
    except Exception:
        logger.exception("Could not deliver notification %r", title)
        ok = False
    return ok


# ---------------------------------------------------------------------------
# Null adapter
# ---------------------------------------------------------------------------


@dataclass
class NullAlertSink:
    """Silent no-op alert adapter."""

    def play_alert(self) -> None:
        """Silently discard the audio cue."""
        logger.debug("NullAlertSink.play_alert() — discarded")

    def notify(self, title: str, body: str) -> None:  # noqa: ARG002
        """Silently discard the notification."""
        logger.debug("NullAlertSink.notify(%s) — discarded", title)


# ---------------------------------------------------------------------------
# Mock / test-double adapter
# ---------------------------------------------------------------------------


@dataclass
class MockAlertSink:
    """In-memory test double that records alert calls.

    Set ``fail_with`` to an exception instance to make both methods
    raise it *after* recording the call, which exercises the
    isolation in :func:`dispatch_alert`.
    """

    alerts: int = 0
    notifications: list[tuple[str, str]] = field(default_factory=list)
    fail_with: Exception | None = None

    def play_alert(self) -> None:
        """Record an audio cue."""
        self.alerts += 1
        if self.fail_with is not None:
            raise self.fail_with

    def notify(self, title: str, body: str) -> None:
        """Record a notification."""
        self.notifications.append((title, body))
        if self.fail_with is not None:
            raise self.fail_with

    @property
    def notify_count(self) -> int:
        """Number of recorded notifications."""
        return len(self.notifications)

    def reset(self) -> None:
        """Clear all recorded data."""
        self.alerts = 0
        self.notifications.clear()


# ---------------------------------------------------------------------------
# Terminal adapter
# ---------------------------------------------------------------------------


@dataclass
class TerminalAlertSink:
    """Alert adapter for terminal sessions.

    ``play_alert`` writes ``beeps`` BEL characters to *stream* (the
    terminal emulator turns them into an audible or visual bell).
    ``notify`` always echoes the message to *stream*; when
    ``notifications`` is granted and ``notify-send`` is installed it
    additionally spawns a desktop notification without waiting for it.

    Args:
        stream: Output stream, defaults to ``sys.stdout``.
        bell: Emit BEL characters at all.
        beeps: Number of BEL characters per alert.
        notifications: Permission to raise desktop notifications.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    bell: bool = True
    beeps: int = 2
    notifications: bool = False

    def play_alert(self) -> None:
        """Ring the terminal bell."""
        if not self.bell:
            return
        self.stream.write(_BELL * self.beeps)
        self.stream.flush()

    def notify(self, title: str, body: str) -> None:
        """Print the message and, if permitted, raise a desktop notification."""
        self.stream.write(f"\n{title} {body}\n")
        self.stream.flush()
        if not self.notifications:
            return
        executable = shutil.which(_NOTIFY_SEND)
        if executable is None:
            logger.debug("%s not found — desktop notification skipped", _NOTIFY_SEND)
            return
        try:
            subprocess.Popen(  # noqa: S603
                [executable, title, body],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            logger.exception("Failed to spawn %s", _NOTIFY_SEND)
