"""chronokit.

Drift-free stopwatch and countdown engines on a monotonic clock, with
a terminal driver and CLI.
"""

from importlib.metadata import PackageNotFoundError, version

from chronokit._alerts import (
    DEFAULT_ALERT_BODY,
    DEFAULT_ALERT_TITLE,
    AlertSink,
    MockAlertSink,
    NullAlertSink,
    TerminalAlertSink,
    dispatch_alert,
)
from chronokit._clock import ClockPort, SystemClock
from chronokit._countdown import CountdownEngine
from chronokit._display import DisplayPort, MockDisplay, TerminalDisplay
from chronokit._driver import Driver, Mode
from chronokit._format import format_countdown, format_elapsed
from chronokit._logging import JsonFormatter, configure_logging
from chronokit._settings import (
    AlertSettings,
    CountdownSettings,
    LoggingSettings,
    Settings,
    StopwatchSettings,
)
from chronokit._stopwatch import Lap, StopwatchEngine

try:
    __version__ = version("chronokit")
except PackageNotFoundError:
    # Source checkout without installed metadata
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Engines
    "CountdownEngine",
    "Lap",
    "StopwatchEngine",
    # Clock
    "ClockPort",
    "SystemClock",
    # Formatting
    "format_countdown",
    "format_elapsed",
    # Alerts
    "DEFAULT_ALERT_BODY",
    "DEFAULT_ALERT_TITLE",
    "AlertSink",
    "MockAlertSink",
    "NullAlertSink",
    "TerminalAlertSink",
    "dispatch_alert",
    # Display
    "DisplayPort",
    "MockDisplay",
    "TerminalDisplay",
    # Driver
    "Driver",
    "Mode",
    # Logging
    "JsonFormatter",
    "configure_logging",
    # Settings
    "AlertSettings",
    "CountdownSettings",
    "LoggingSettings",
    "Settings",
    "StopwatchSettings",
]
