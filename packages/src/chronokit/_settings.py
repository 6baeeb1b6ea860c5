"""Application configuration via pydantic-settings.

Configuration is loaded from environment variables and/or ``.env``
files.  Variables use the ``CHRONOKIT_`` prefix and ``__`` as the
nested delimiter, e.g. ``CHRONOKIT_COUNTDOWN__MINUTES=5``.

The schema covers four concerns:

* **Logging** — level, format, optional file sink, rotation.
* **Stopwatch** — display refresh cadence.
* **Countdown** — refresh cadence and the default duration.
* **Alerts** — terminal bell, desktop notification permission, texts.

All refresh intervals are in **seconds**.  Engine durations are not
configured here; they are integer milliseconds internally.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chronokit._alerts import DEFAULT_ALERT_BODY, DEFAULT_ALERT_TITLE
from chronokit._countdown import MAX_HOURS, MAX_MINUTES, MAX_SECONDS

# -------------------------------------------------------------------
# Sub-models (BaseModel, NOT BaseSettings — nested via composition)
# -------------------------------------------------------------------


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file
    (size-based rotation, ``backup_count`` generations kept).  When
    ``None``, logs go to stderr only.

    The ``format`` field selects the output format:

    - ``"text"`` (default) — human-readable timestamped lines, the
      natural choice for an interactive terminal tool.
    - ``"json"`` — structured JSON lines for log aggregators.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="text",
        description=(
            "Log output format. "
            "'text' emits human-readable timestamped lines; "
            "'json' emits structured JSON lines."
        ),
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description=(
            "Maximum log file size in megabytes before rotation. "
            "Only applies when ``file`` is set."
        ),
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


class StopwatchSettings(BaseModel):
    """Stopwatch display configuration.

    Environment variables::

        CHRONOKIT_STOPWATCH__REFRESH_INTERVAL=0.05
    """

    refresh_interval: Annotated[float, Field(gt=0)] = Field(
        default=0.01,
        description=(
            "Seconds between display refreshes.  Affects only how "
            "often the time is redrawn, never the measured value."
        ),
    )


class CountdownSettings(BaseModel):
    """Countdown display configuration and default duration.

    Environment variables::

        CHRONOKIT_COUNTDOWN__REFRESH_INTERVAL=0.1
        CHRONOKIT_COUNTDOWN__MINUTES=25
    """

    refresh_interval: Annotated[float, Field(gt=0)] = Field(
        default=0.1,
        description="Seconds between countdown ticks and display refreshes.",
    )
    hours: Annotated[int, Field(ge=0, le=MAX_HOURS)] = Field(
        default=0,
        description="Default hours when the CLI is given none.",
    )
    minutes: Annotated[int, Field(ge=0, le=MAX_MINUTES)] = Field(
        default=0,
        description="Default minutes when the CLI is given none.",
    )
    seconds: Annotated[int, Field(ge=0, le=MAX_SECONDS)] = Field(
        default=0,
        description="Default seconds when the CLI is given none.",
    )


class AlertSettings(BaseModel):
    """Completion alert configuration.

    ``notifications`` is the user's permission grant for desktop
    notifications; without it only the terminal bell and text line
    are produced.
    """

    bell: bool = Field(
        default=True,
        description="Ring the terminal bell on completion.",
    )
    beeps: Annotated[int, Field(ge=1, le=10)] = Field(
        default=2,
        description="Number of bell characters per alert.",
    )
    notifications: bool = Field(
        default=False,
        description="Allow desktop notifications via notify-send.",
    )
    title: str = Field(
        default=DEFAULT_ALERT_TITLE,
        description="Notification title.",
    )
    body: str = Field(
        default=DEFAULT_ALERT_BODY,
        description="Notification body text.",
    )


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings for chronokit.

    Loaded from ``CHRONOKIT_``-prefixed environment variables with the
    nested delimiter ``__`` and an optional ``.env`` file in the
    working directory.

    Example ``.env``::

        CHRONOKIT_LOGGING__LEVEL=DEBUG
        CHRONOKIT_LOGGING__FORMAT=json
        CHRONOKIT_COUNTDOWN__MINUTES=25
        CHRONOKIT_ALERTS__NOTIFICATIONS=true
    """

    model_config = SettingsConfigDict(
        env_prefix="CHRONOKIT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    """``extra="ignore"`` lets a shared ``.env`` file carry variables
    for other tools without failing validation here."""

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
    stopwatch: StopwatchSettings = Field(
        default_factory=StopwatchSettings,
        description="Stopwatch display settings.",
    )
    countdown: CountdownSettings = Field(
        default_factory=CountdownSettings,
        description="Countdown settings.",
    )
    alerts: AlertSettings = Field(
        default_factory=AlertSettings,
        description="Completion alert settings.",
    )
