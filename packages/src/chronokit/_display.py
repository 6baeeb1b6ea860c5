"""Display port and adapters.

Provides DisplayPort (Protocol) and two implementations:

- TerminalDisplay — single-line terminal rendering with ``\\r``
- MockDisplay — test double that records every frame

The port receives already-formatted text. No engine holds a reference
to a display; only the :class:`~chronokit._driver.Driver` calls it.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Protocol, TextIO, runtime_checkable

# ---------------------------------------------------------------------------
# Port (Protocol)
# ---------------------------------------------------------------------------


@runtime_checkable
class DisplayPort(Protocol):
    """Port contract for rendering engine output."""

    def show_stopwatch(self, text: str) -> None: ...

    def add_lap(self, number: int, text: str) -> None: ...

    def clear_laps(self) -> None: ...

    def show_countdown(self, text: str) -> None: ...

    def show_complete(self, message: str) -> None: ...

    def clear_complete(self) -> None: ...


# ---------------------------------------------------------------------------
# Mock / test-double adapter
# ---------------------------------------------------------------------------


@dataclass
class MockDisplay:
    """In-memory test double that records rendered output.

    ``laps`` mirrors a lap list widget: new entries are inserted at
    the front, so it reads newest-first.
    """

    stopwatch_frames: list[str] = field(default_factory=list)
    countdown_frames: list[str] = field(default_factory=list)
    laps: list[tuple[int, str]] = field(default_factory=list)
    complete_messages: list[str] = field(default_factory=list)
    complete_shown: bool = False

    def show_stopwatch(self, text: str) -> None:
        self.stopwatch_frames.append(text)

    def add_lap(self, number: int, text: str) -> None:
        self.laps.insert(0, (number, text))

    def clear_laps(self) -> None:
        self.laps.clear()

    def show_countdown(self, text: str) -> None:
        self.countdown_frames.append(text)

    def show_complete(self, message: str) -> None:
        self.complete_messages.append(message)
        self.complete_shown = True

    def clear_complete(self) -> None:
        self.complete_shown = False

    @property
    def last_stopwatch(self) -> str | None:
        """Most recent stopwatch frame, if any."""
        return self.stopwatch_frames[-1] if self.stopwatch_frames else None

    @property
    def last_countdown(self) -> str | None:
        """Most recent countdown frame, if any."""
        return self.countdown_frames[-1] if self.countdown_frames else None


# ---------------------------------------------------------------------------
# Terminal adapter
# ---------------------------------------------------------------------------


@dataclass
class TerminalDisplay:
    """Render to a terminal by rewriting the current line.

    Time frames overwrite each other in place; laps and completion
    messages are printed on their own lines above the live frame.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    _last_frame: str = field(default="", init=False, repr=False)

    def _frame(self, text: str) -> None:
        if text == self._last_frame:
            return
        self._last_frame = text
        self.stream.write(f"\r{text}")
        self.stream.flush()

    def _line(self, text: str) -> None:
        self.stream.write(f"\r{text}\n")
        # Redraw the live frame below the printed line.
        self.stream.write(f"\r{self._last_frame}")
        self.stream.flush()

    def show_stopwatch(self, text: str) -> None:
        self._frame(text)

    def add_lap(self, number: int, text: str) -> None:
        self._line(f"Lap {number}  {text}")

    def clear_laps(self) -> None:
        self._line("Laps cleared")

    def show_countdown(self, text: str) -> None:
        self._frame(text)

    def show_complete(self, message: str) -> None:
        self._line(message)

    def clear_complete(self) -> None:
        """Nothing to undo on a plain terminal."""
