"""Listing and apply output rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from ccienv.engine.reconcile import format_variable_lines

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ccienv.engine.types import ApplyResult, Variable


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def format_variables(variables: Sequence[Variable]) -> str:
    """Render variables as aligned ``name value`` lines."""
    if not variables:
        return "No variables."
    return "\n".join(format_variable_lines(variables))


_SUMMARY_PARTS = (
    ("create", "created", "green"),
    ("delete", "deleted", "red"),
    ("failed", "failed", "red"),
)


def format_apply_summary(result: ApplyResult, *, color: bool = True) -> str:
    """Render ``Done! Variables: 2 created, 0 deleted, 0 failed.``"""
    style = styler(color)
    summary = result.summary()
    parts = [
        style(f"{summary[key]} {verb}", fg=fg) if summary[key] else f"{summary[key]} {verb}"
        for key, verb, fg in _SUMMARY_PARTS
    ]
    header = (
        style("Done!", fg="green", bold=True)
        if result.ok
        else style("Done with errors.", fg="yellow", bold=True)
    )
    return f"{header} Variables: {', '.join(parts)}."
