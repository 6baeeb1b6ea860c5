"""Command-line interface for chronokit (Typer-based).

Provides :func:`build_cli` which constructs a Typer app with global
options (``--version``, ``--log-level``, ``--log-format``,
``--env-file``) and two commands:

* ``stopwatch`` — live stopwatch.  On a terminal, type a key and press
  Enter: ``s`` start/pause, Enter alone (or ``l``) lap, ``p`` pause,
  ``r`` reset, ``q`` quit.
* ``countdown`` — counts down ``--hours``/``--minutes``/``--seconds``
  and exits when it completes.  ``s``, ``p``, ``r`` and ``q`` work as
  above.

Ctrl-C (SIGINT) and SIGTERM end either session cleanly.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys
from collections.abc import Callable, Coroutine, Iterator
from typing import Annotated, Any, get_args

import typer
from pydantic import ValidationError

from chronokit import __version__
from chronokit._clock import ClockPort
from chronokit._driver import Driver, Mode
from chronokit._format import format_countdown, format_elapsed
from chronokit._logging import configure_logging
from chronokit._settings import LoggingSettings, Settings

logger = logging.getLogger(__name__)

APP_NAME = "chronokit"

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 3

# ---------------------------------------------------------------------------
# Allowed values (extracted from LoggingSettings Literal types)
# ---------------------------------------------------------------------------

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)
_VALID_LOG_FORMATS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["format"].annotation,
)

# ---------------------------------------------------------------------------
# Session plumbing
# ---------------------------------------------------------------------------


def _install_signal_handlers(shutdown_event: asyncio.Event) -> None:
    """Route SIGTERM/SIGINT to *shutdown_event*."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown_event.set)


@contextlib.contextmanager
def _keyboard(
    driver: Driver,
    mode: Mode,
    shutdown_event: asyncio.Event,
) -> Iterator[None]:
    """Feed stdin lines to :meth:`Driver.handle_key` while active.

    Only attached when stdin is a terminal; piped or captured stdin
    leaves the session keyboard-less.
    """
    if not sys.stdin.isatty():
        yield
        return

    loop = asyncio.get_running_loop()
    fd = sys.stdin.fileno()

    def on_input() -> None:
        line = sys.stdin.readline()
        if not line:
            loop.remove_reader(fd)
            return
        if not driver.handle_key(mode, line):
            shutdown_event.set()

    loop.add_reader(fd, on_input)
    try:
        yield
    finally:
        loop.remove_reader(fd)


async def _stopwatch_session(driver: Driver) -> None:
    shutdown_event = asyncio.Event()
    _install_signal_handlers(shutdown_event)
    driver.start_stopwatch()
    with _keyboard(driver, Mode.STOPWATCH, shutdown_event):
        await driver.run_stopwatch(shutdown_event)


async def _countdown_session(driver: Driver) -> None:
    shutdown_event = asyncio.Event()
    _install_signal_handlers(shutdown_event)
    driver.start_countdown()
    with _keyboard(driver, Mode.COUNTDOWN, shutdown_event):
        await driver.run_countdown(shutdown_event, stop_on_complete=True)


def _run(
    session: Callable[[Driver], Coroutine[Any, Any, None]],
    driver: Driver,
) -> None:
    """Run *session* to completion, mapping failures to exit codes."""
    try:
        with contextlib.suppress(KeyboardInterrupt):
            asyncio.run(session(driver))
    except SystemExit:
        raise
    except Exception as exc:
        logger.error("Runtime error: %s", exc)
        sys.exit(EXIT_RUNTIME_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_cli(*, clock: ClockPort | None = None) -> typer.Typer:
    """Construct the chronokit Typer CLI.

    Args:
        clock: Override clock for both engines.  Defaults to the
            monotonic :class:`~chronokit._clock.SystemClock`.

    Returns:
        A configured :class:`typer.Typer` ready to invoke.
    """
    cli = typer.Typer(
        help=f"{APP_NAME} v{__version__} — terminal stopwatch and countdown timer",
        no_args_is_help=True,
    )

    # -- global options -----------------------------------------------------

    @cli.callback()
    def main(
        ctx: typer.Context,
        version_flag: Annotated[
            bool | None,
            typer.Option(
                "--version",
                is_eager=True,
                callback=_version_callback,
                help="Show version and exit.",
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        log_format: Annotated[
            str | None,
            typer.Option("--log-format", help="Override log format."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        # -- validate enum-like options -------------------------------------
        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )

        if log_format is not None and log_format.lower() not in _VALID_LOG_FORMATS:
            raise typer.BadParameter(
                f"Invalid log format '{log_format}'. "
                f"Choose from: {', '.join(_VALID_LOG_FORMATS)}",
                param_hint="'--log-format'",
            )

        # -- build settings -------------------------------------------------
        try:
            settings = Settings(_env_file=env_file)  # type: ignore[call-arg]
        except ValidationError as exc:
            logger.error("Configuration error: %s", exc)
            typer.echo(f"Configuration error: {exc}", err=True)
            raise SystemExit(EXIT_CONFIG_ERROR) from exc

        # -- apply CLI overrides --------------------------------------------
        if log_level is not None:
            settings.logging = settings.logging.model_copy(
                update={"level": log_level.upper()},
            )

        if log_format is not None:
            settings.logging = settings.logging.model_copy(
                update={"format": log_format.lower()},
            )

        configure_logging(settings.logging, service=APP_NAME, version=__version__)
        ctx.obj = settings

    # -- stopwatch ----------------------------------------------------------

    @cli.command()
    def stopwatch(ctx: typer.Context) -> None:
        """Run a live stopwatch (s start/pause, Enter lap, r reset, q quit)."""
        settings: Settings = ctx.obj
        driver = Driver.for_terminal(settings, clock=clock)
        _run(_stopwatch_session, driver)

        final = format_elapsed(driver.stopwatch.elapsed(driver.clock.now()))
        typer.echo(f"\nStopped at {final}")
        for index, value in enumerate(driver.stopwatch.laps, start=1):
            typer.echo(f"Lap {index}  {format_elapsed(value)}")

    # -- countdown ----------------------------------------------------------

    @cli.command()
    def countdown(
        ctx: typer.Context,
        hours: Annotated[
            int | None,
            typer.Option("--hours", "-H", help="Hours (0-99)."),
        ] = None,
        minutes: Annotated[
            int | None,
            typer.Option("--minutes", "-M", help="Minutes (0-59)."),
        ] = None,
        seconds: Annotated[
            int | None,
            typer.Option("--seconds", "-S", help="Seconds (0-59)."),
        ] = None,
    ) -> None:
        """Count down from the given duration and alert on completion.

        Out-of-range values are clamped (e.g. 70 minutes becomes 59).
        """
        settings: Settings = ctx.obj
        defaults = settings.countdown
        driver = Driver.for_terminal(settings, clock=clock)
        driver.configure_countdown(
            hours if hours is not None else defaults.hours,
            minutes if minutes is not None else defaults.minutes,
            seconds if seconds is not None else defaults.seconds,
        )
        if driver.countdown.total == 0:
            typer.echo("Countdown duration must be greater than zero.", err=True)
            raise SystemExit(EXIT_CONFIG_ERROR)

        _run(_countdown_session, driver)

        if not driver.countdown.completed:
            remaining = format_countdown(driver.countdown.remaining)
            typer.echo(f"\nCountdown stopped with {remaining} remaining")

    return cli


def main() -> None:
    """Console-script entry point."""
    build_cli()()
