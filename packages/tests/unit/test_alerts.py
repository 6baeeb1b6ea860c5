"""Unit tests for chronokit._alerts — alert port, adapters, dispatch.

Test Techniques Used:
    - Protocol Conformance: Adapters satisfy AlertSink
    - Error Condition Testing: dispatch_alert isolates failures
    - Mock-based Testing: notify-send spawning via patched subprocess
"""

from __future__ import annotations

import io
import logging
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from chronokit._alerts import (
    AlertSink,
    MockAlertSink,
    NullAlertSink,
    TerminalAlertSink,
    dispatch_alert,
)

_NOTIFY_SEND_PATH = "/usr/bin/notify-send"


class TestProtocolConformance:
    """Every shipped adapter satisfies AlertSink.

    Technique: Protocol Conformance.
    """

    @pytest.mark.parametrize(
        "sink", [NullAlertSink(), MockAlertSink(), TerminalAlertSink(io.StringIO())]
    )
    def test_is_alert_sink(self, sink: object) -> None:
        assert isinstance(sink, AlertSink)


class TestDispatchAlert:
    """dispatch_alert() fire-and-forget semantics.

    Technique: Error Condition Testing.
    """

    def test_calls_both_methods(self, mock_alerts: MockAlertSink) -> None:
        assert dispatch_alert(mock_alerts, "T", "B") is True
        assert mock_alerts.alerts == 1
        assert mock_alerts.notifications == [("T", "B")]

    def test_failure_is_logged_not_raised(
        self, mock_alerts: MockAlertSink, caplog: pytest.LogCaptureFixture
    ) -> None:
        mock_alerts.fail_with = RuntimeError("speaker unplugged")

        with caplog.at_level(logging.ERROR, logger="chronokit._alerts"):
            ok = dispatch_alert(mock_alerts, "T", "B")

        assert ok is False
        assert "Could not play alert sound" in caplog.text
        assert "Could not deliver notification" in caplog.text

    def test_notify_attempted_after_play_failure(self) -> None:
        """A failing audio cue does not suppress the notification."""
        sink = MagicMock()
        sink.play_alert.side_effect = OSError("no device")

        ok = dispatch_alert(sink, "T", "B")

        assert ok is False
        sink.notify.assert_called_once_with("T", "B")


class TestMockAlertSink:
    """MockAlertSink recording helpers.

    Technique: State Inspection.
    """

    def test_reset_clears_records(self) -> None:
        sink = MockAlertSink()
        sink.play_alert()
        sink.notify("a", "b")
        sink.reset()
        assert sink.alerts == 0
        assert sink.notify_count == 0


class TestTerminalAlertSink:
    """TerminalAlertSink output and desktop notifications.

    Technique: Mock-based Testing.
    """

    def test_play_alert_writes_bells(self) -> None:
        stream = io.StringIO()
        TerminalAlertSink(stream=stream, beeps=3).play_alert()
        assert stream.getvalue() == "\a\a\a"

    def test_bell_disabled_writes_nothing(self) -> None:
        stream = io.StringIO()
        TerminalAlertSink(stream=stream, bell=False).play_alert()
        assert stream.getvalue() == ""

    def test_notify_echoes_message(self) -> None:
        stream = io.StringIO()
        TerminalAlertSink(stream=stream).notify("Timer Complete!", "Done.")
        assert "Timer Complete! Done." in stream.getvalue()

    def test_no_desktop_notification_without_permission(self) -> None:
        sink = TerminalAlertSink(stream=io.StringIO(), notifications=False)
        with patch("chronokit._alerts.subprocess.Popen") as popen:
            sink.notify("T", "B")
        popen.assert_not_called()

    def test_spawns_notify_send_when_permitted(self) -> None:
        sink = TerminalAlertSink(stream=io.StringIO(), notifications=True)
        with (
            patch("chronokit._alerts.shutil.which", return_value=_NOTIFY_SEND_PATH),
            patch("chronokit._alerts.subprocess.Popen") as popen,
        ):
            sink.notify("T", "B")

        popen.assert_called_once_with(
            [_NOTIFY_SEND_PATH, "T", "B"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )

    def test_missing_notify_send_is_skipped(self) -> None:
        sink = TerminalAlertSink(stream=io.StringIO(), notifications=True)
        with (
            patch("chronokit._alerts.shutil.which", return_value=None),
            patch("chronokit._alerts.subprocess.Popen") as popen,
        ):
            sink.notify("T", "B")
        popen.assert_not_called()

    def test_spawn_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = TerminalAlertSink(stream=io.StringIO(), notifications=True)
        with (
            patch("chronokit._alerts.shutil.which", return_value=_NOTIFY_SEND_PATH),
            patch("chronokit._alerts.subprocess.Popen", side_effect=OSError("nope")),
            caplog.at_level(logging.ERROR, logger="chronokit._alerts"),
        ):
            sink.notify("T", "B")

        assert "Failed to spawn notify-send" in caplog.text
