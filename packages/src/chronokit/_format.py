"""Duration-to-text formatting for stopwatch and countdown displays.

Both functions take integer milliseconds and return zero-padded,
colon-separated fields:

* :func:`format_elapsed` — ``HH:MM:SS:CC`` with centiseconds, rounding
  every field *down*.
* :func:`format_countdown` — ``HH:MM:SS`` rounding *up* to the next
  whole second, so a running countdown shows ``00:00:01`` until the
  deadline is actually reached and never ``00:00:00`` early.

Negative durations are formatted as zero.
"""

from __future__ import annotations

_MS_PER_SECOND = 1000
_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3600


def _pad(value: int) -> str:
    return f"{value:02d}"


def _split_seconds(total_seconds: int) -> tuple[int, int, int]:
    """Split whole seconds into ``(hours, minutes, seconds)``."""
    hours, rest = divmod(total_seconds, _SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, _SECONDS_PER_MINUTE)
    return hours, minutes, seconds


def format_elapsed(duration_ms: int) -> str:
    """Format an elapsed duration as ``HH:MM:SS:CC``.

    Args:
        duration_ms: Elapsed milliseconds.

    Returns:
        The display string, e.g. ``format_elapsed(1500) == "00:00:01:50"``.
    """
    duration_ms = max(0, duration_ms)
    total_seconds, millis = divmod(duration_ms, _MS_PER_SECOND)
    hours, minutes, seconds = _split_seconds(total_seconds)
    centis = millis // 10
    return ":".join(_pad(v) for v in (hours, minutes, seconds, centis))


def format_countdown(duration_ms: int) -> str:
    """Format a remaining duration as ``HH:MM:SS`` using ceiling seconds.

    Args:
        duration_ms: Remaining milliseconds.

    Returns:
        The display string, e.g. ``format_countdown(4001) == "00:00:05"``.
    """
    duration_ms = max(0, duration_ms)
    # Integer ceiling division keeps exact millisecond boundaries.
    total_seconds = -(-duration_ms // _MS_PER_SECOND)
    hours, minutes, seconds = _split_seconds(total_seconds)
    return ":".join(_pad(v) for v in (hours, minutes, seconds))
