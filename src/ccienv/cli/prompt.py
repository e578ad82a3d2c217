"""Terminal implementation of the engine's ``Prompter`` interface."""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, TextIO

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ccienv.engine.errors import ApplyCanceled, ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}
_NO = {"", "n", "no"}


class SelectionError(ValueError):
    """Raised when a selection string cannot be parsed."""


def parse_selection(text: str, count: int) -> list[int]:
    """Parse ``"1,3-5"`` style input into sorted zero-based indices.

    ``all`` selects everything; an empty string selects nothing.
    """
    text = text.strip()
    if not text:
        return []
    if text.lower() == "all":
        return list(range(count))

    indices: set[int] = set()
    for token in text.replace(" ", ",").split(","):
        if not token:
            continue
        start_s, sep, end_s = token.partition("-")
        try:
            start = int(start_s)
            end = int(end_s) if sep else start
        except ValueError as exc:
            raise SelectionError(f"not a number or range: {token!r}") from exc
        if start > end:
            raise SelectionError(f"invalid range: {token!r}")
        if start < 1 or end > count:
            raise SelectionError(f"out of range 1-{count}: {token!r}")
        indices.update(range(start - 1, end))
    return sorted(indices)


def _terminal_device() -> str:
    return "CON" if os.name == "nt" else "/dev/tty"


def _open_terminal() -> TextIO | None:
    """Open the controlling terminal, or return None when there is none."""
    path = _terminal_device()
    try:
        return open(path, encoding="utf-8")
    except OSError as exc:
        logger.debug("Cannot open %s for prompts: %s", path, exc)
        return None


_SELECT_HINT = "Select numbers (e.g. 1,3-5, 'all'; empty for none)"


class TerminalPrompt:
    """Prompts via typer/click and renders choices with Rich.

    Once :meth:`read_all` has drained a piped stdin, later answers are read
    from the controlling terminal instead.
    """

    def __init__(self, *, color: bool = True, stdin: TextIO | None = None) -> None:
        self._console = Console(no_color=not color, highlight=False)
        self._stdin = stdin
        self._stdin_drained = False
        self._terminal: TextIO | None = None

    def echo(self, message: str = "") -> None:
        typer.echo(message)

    def _ask(self, text: str) -> str:
        if self._terminal is None:
            raise ValidationError(
                "standard input was used for the variables and no terminal is "
                "available to answer prompts; pass a file path instead"
            )
        typer.echo(text, nl=False)
        line = self._terminal.readline()
        if not line:
            raise ApplyCanceled("prompt interrupted")
        return line.rstrip("\r\n")

    def confirm(self, message: str) -> bool:
        if not self._stdin_drained:
            try:
                return typer.confirm(message, default=False)
            except typer.Abort as exc:
                raise ApplyCanceled("prompt interrupted") from exc

        while True:
            answer = self._ask(f"{message} [y/N]: ").strip().lower()
            if answer in _YES:
                return True
            if answer in _NO:
                return False
            typer.echo("Error: invalid input", err=True)

    def select_many(self, message: str, options: Sequence[str]) -> list[str]:
        if not options:
            return []
        table = Table(title=message, show_header=False, box=None, title_justify="left")
        table.add_column(justify="right", style="cyan")
        table.add_column()
        for i, option in enumerate(options, start=1):
            table.add_row(str(i), Text(option))
        self._console.print(table)

        while True:
            answer = self.read_line(_SELECT_HINT, default="")
            try:
                return [options[i] for i in parse_selection(answer, len(options))]
            except SelectionError as exc:
                typer.echo(f"Invalid selection: {exc}", err=True)

    def read_line(self, message: str, *, default: str | None = None) -> str:
        if not self._stdin_drained:
            try:
                return typer.prompt(message, default=default, show_default=False)
            except typer.Abort as exc:
                raise ApplyCanceled("prompt interrupted") from exc

        while True:
            answer = self._ask(f"{message}: ")
            if answer:
                return answer
            if default is not None:
                return default

    def read_secret(self, message: str) -> str:
        # getpass reads from the terminal device itself, even with stdin piped.
        try:
            return typer.prompt(message, hide_input=True)
        except typer.Abort as exc:
            raise ApplyCanceled("prompt interrupted") from exc

    def read_all(self, message: str) -> str:
        typer.echo(message, err=True)
        stream = self._stdin if self._stdin is not None else sys.stdin
        try:
            content = stream.read()
        except KeyboardInterrupt as exc:
            raise ApplyCanceled("input interrupted") from exc
        if not stream.isatty():
            self._stdin_drained = True
            self._terminal = _open_terminal()
        return content
