"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer


def _err(msg: str, *, fg: str | None) -> None:
    """Print a styled message to stderr."""
    typer.echo(typer.style(msg, fg=fg), err=True)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print a clean error message to stderr and return an exit code.

    All errors map to exit code 1.  No tracebacks are printed.
    """
    from ccienv.config.loader import ConfigError
    from ccienv.engine.errors import (
        ApplyCanceled,
        ParseError,
        TransportError,
        ValidationError,
    )

    fg = typer.colors.RED if color else None

    if isinstance(exc, ConfigError):
        _err(f"Configuration error: {exc}", fg=fg)
    elif isinstance(exc, (ParseError, ValidationError)):
        _err(f"Invalid input: {exc}", fg=fg)
    elif isinstance(exc, TransportError):
        _err(f"API request failed: {exc}", fg=fg)
    elif isinstance(exc, ApplyCanceled):
        _err("Canceled.", fg=fg)
    else:
        _err(f"Error: {exc}", fg=fg)

    return 1
