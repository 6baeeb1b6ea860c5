"""Public test-support utilities for chronokit.

Re-exports test doubles and factories so that consumer test suites
can import everything from a single ``chronokit.testing`` namespace
instead of reaching into private modules.

Provided symbols:

- :class:`DriverHarness` — Driver pre-wired with the doubles below.
- :class:`FakeClock` — deterministic millisecond clock.
- :class:`MockAlertSink` — alert double that records calls.
- :class:`MockDisplay` — display double that records frames.
- :class:`NullAlertSink` — silent no-op alert adapter.
- :func:`make_settings` — factory for ``Settings`` without ``.env`` files.
"""

from chronokit._alerts import MockAlertSink, NullAlertSink
from chronokit._display import MockDisplay
from chronokit.testing._clock import FakeClock
from chronokit.testing._harness import DriverHarness
from chronokit.testing._settings import make_settings

__all__ = [
    "DriverHarness",
    "FakeClock",
    "MockAlertSink",
    "MockDisplay",
    "NullAlertSink",
    "make_settings",
]
