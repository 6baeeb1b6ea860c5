"""Unit tests for chronokit._display — display port and adapters.

Test Techniques Used:
    - Protocol Conformance: Adapters satisfy DisplayPort
    - State Inspection: MockDisplay records, TerminalDisplay output
"""

from __future__ import annotations

import io

from chronokit._display import DisplayPort, MockDisplay, TerminalDisplay


class TestProtocolConformance:
    """Shipped adapters satisfy DisplayPort.

    Technique: Protocol Conformance.
    """

    def test_mock_display(self) -> None:
        assert isinstance(MockDisplay(), DisplayPort)

    def test_terminal_display(self) -> None:
        assert isinstance(TerminalDisplay(io.StringIO()), DisplayPort)


class TestMockDisplay:
    """MockDisplay recording.

    Technique: State Inspection.
    """

    def test_laps_are_newest_first(self) -> None:
        display = MockDisplay()
        display.add_lap(1, "00:00:02:30")
        display.add_lap(2, "00:00:04:80")
        assert display.laps == [(2, "00:00:04:80"), (1, "00:00:02:30")]

    def test_complete_state(self) -> None:
        display = MockDisplay()
        display.show_complete("Timer Complete!")
        assert display.complete_shown is True
        display.clear_complete()
        assert display.complete_shown is False
        assert display.complete_messages == ["Timer Complete!"]

    def test_last_frames(self) -> None:
        display = MockDisplay()
        assert display.last_stopwatch is None
        display.show_stopwatch("a")
        display.show_stopwatch("b")
        display.show_countdown("c")
        assert display.last_stopwatch == "b"
        assert display.last_countdown == "c"


class TestTerminalDisplay:
    """TerminalDisplay in-place rendering.

    Technique: State Inspection of the output stream.
    """

    def test_frame_rewrites_line(self) -> None:
        stream = io.StringIO()
        display = TerminalDisplay(stream)
        display.show_stopwatch("00:00:01:00")
        assert stream.getvalue() == "\r00:00:01:00"

    def test_identical_frames_are_skipped(self) -> None:
        stream = io.StringIO()
        display = TerminalDisplay(stream)
        display.show_countdown("00:00:05")
        display.show_countdown("00:00:05")
        assert stream.getvalue().count("00:00:05") == 1

    def test_lap_printed_on_own_line(self) -> None:
        stream = io.StringIO()
        display = TerminalDisplay(stream)
        display.show_stopwatch("00:00:03:00")
        display.add_lap(1, "00:00:02:30")

        output = stream.getvalue()
        assert "Lap 1  00:00:02:30\n" in output
        assert output.endswith("\r00:00:03:00")

    def test_complete_message_printed(self) -> None:
        stream = io.StringIO()
        TerminalDisplay(stream).show_complete("Timer Complete!")
        assert "Timer Complete!\n" in stream.getvalue()
