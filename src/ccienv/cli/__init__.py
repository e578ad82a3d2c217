"""ccienv command-line interface.

Global options (verbosity, color) are resolved once in the app callback and
handed to every command through ``ctx.obj`` as a :class:`CliState`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from ccienv import __version__

app = typer.Typer(
    name="ccienv",
    no_args_is_help=True,
    add_completion=False,
)

LOG_ENV_VAR = "CCIENV_LOG"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CliState:
    """Options shared by all commands."""

    color: bool = True


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"ccienv {__version__}")
        raise typer.Exit


def _log_level(verbose: int, requested: str) -> int:
    """``CCIENV_LOG`` wins over ``-v``; warnings are always shown."""
    if requested in _LOG_LEVELS:
        return getattr(logging, requested)
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def _setup_logging(verbose: int, *, color: bool) -> None:
    """Send ``ccienv`` log records to stderr.

    At the default level only warnings and errors appear, printed as bare
    messages so that notices like an incomplete listing or a failed delete
    read as part of the command output. With ``-v`` the level is shown too.
    """
    requested = os.environ.get(LOG_ENV_VAR, "").strip().upper()
    level = _log_level(verbose, requested)

    handler = RichHandler(
        console=Console(stderr=True, no_color=not color),
        show_time=False,
        show_path=False,
        show_level=level < logging.WARNING,
    )
    log = logging.getLogger("ccienv")
    for old in [h for h in log.handlers if isinstance(h, RichHandler)]:
        log.removeHandler(old)
    log.addHandler(handler)
    log.setLevel(level)

    if requested and requested not in _LOG_LEVELS:
        log.warning("Ignoring invalid %s level %r", LOG_ENV_VAR, requested)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_show_version,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="-v for info logs, -vv for debug."),
    ] = 0,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable colored output (NO_COLOR is honoured too)."),
    ] = False,
) -> None:
    """Manage environment variables of CircleCI projects."""
    _ = version
    color = not (no_color or os.environ.get("NO_COLOR"))
    _setup_logging(verbose, color=color)
    ctx.obj = CliState(color=color)


# Commands register themselves on ``app``.
from ccienv.cli import commands as _commands  # noqa: E402, F401
