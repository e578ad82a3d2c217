"""Interactive prompt interface used by the engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence


class Prompter(Protocol):
    """Blocking, single-shot terminal interactions.

    Implementations raise :class:`~ccienv.engine.errors.ApplyCanceled` when the
    user interrupts a prompt.
    """

    def echo(self, message: str = "") -> None:
        """Print a line of progress output."""
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        ...

    def select_many(self, message: str, options: Sequence[str]) -> list[str]:
        """Let the user choose any subset of *options*, returned in option order."""
        ...

    def read_line(self, message: str) -> str: ...

    def read_secret(self, message: str) -> str: ...

    def read_all(self, message: str) -> str:
        """Read everything until EOF."""
        ...
