"""Confirm-then-apply flows for project environment variables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ccienv.engine.errors import ParseError, TransportError, ValidationError
from ccienv.engine.parser import parse_variables, validate_format
from ccienv.engine.reconcile import (
    format_variable_lines,
    partition_for_delete,
    partition_for_upsert,
    resolve_selection,
)
from ccienv.engine.types import Action, ApplyResult, VariableChange, VariableFailure

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ccienv.core import CircleCIProvider
    from ccienv.engine.parser import FileFormat
    from ccienv.engine.prompt import Prompter
    from ccienv.engine.types import Variable

logger = logging.getLogger(__name__)

STDIN_MESSAGE = "Please input environment variables. (Finish to send EOF)"


class VariablesEngine:
    """Project-scoped list/add/delete operations with interactive confirmation.

    Listing and parse failures propagate. Per-variable write failures during
    bulk flows are logged and recorded on the returned :class:`ApplyResult`
    without stopping the remaining writes.
    """

    def __init__(self, *, provider: CircleCIProvider, project_slug: str, prompt: Prompter) -> None:
        self._provider = provider
        self._project_slug = project_slug
        self._prompt = prompt

    @property
    def project_slug(self) -> str:
        return self._project_slug

    def _list_remote(self) -> list[Variable]:
        listing = self._provider.variables.list(self._project_slug)
        if listing.incomplete:
            logger.warning("Warning! Not all variables are listed.")
        return listing.items

    def _show(self, variables: Sequence[Variable]) -> None:
        self._prompt.echo()
        for line in format_variable_lines(variables):
            self._prompt.echo(line)
        self._prompt.echo()

    def _cancel(self) -> ApplyResult:
        self._prompt.echo("Cancelled.")
        return ApplyResult(canceled=True)

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def list_variables(self) -> list[Variable]:
        return self._list_remote()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def _delete(self, targets: Sequence[Variable]) -> ApplyResult:
        if not targets:
            raise ValidationError("no variables are specified")

        self._prompt.echo("These variables will be removed.")
        self._show(targets)
        if not self._prompt.confirm("Do you want to continue?"):
            return self._cancel()

        result = ApplyResult()
        for v in targets:
            try:
                self._provider.variables.delete(self._project_slug, v.name)
            except TransportError as exc:
                logger.error("Failed to delete %s: %s", v.name, exc)
                result.failed.append(
                    VariableFailure(name=v.name, action=Action.DELETE, error=str(exc))
                )
            else:
                self._prompt.echo(f"Deleted: {v.name}")
                result.applied.append(VariableChange(name=v.name, action=Action.DELETE))
        return result

    def delete_variables(self, names: Sequence[str]) -> ApplyResult:
        """Delete the named variables after confirmation.

        Names that do not exist remotely are reported and skipped.
        """
        if not names:
            raise ValidationError("no variable names are specified")

        partition = partition_for_delete(names, self._list_remote())
        if partition.not_found:
            self._prompt.echo("These variables are not found.")
            for name in partition.not_found:
                self._prompt.echo(f"  {name}")
            self._prompt.echo()
        if not partition.found:
            self._prompt.echo("There are no deleted variables.")
            return ApplyResult()
        return self._delete(partition.found)

    def delete_variables_interactive(self) -> ApplyResult:
        """Let the user pick variables to delete from the full remote list."""
        remote = self._list_remote()
        lines = format_variable_lines(remote)
        selected = self._prompt.select_many("Choose variables to be deleted.", lines)
        if not selected:
            raise ValidationError("no variables are selected")
        return self._delete(resolve_selection(remote, selected))

    # ------------------------------------------------------------------
    # Create / update
    # ------------------------------------------------------------------

    def upsert_variable(self, name: str, value: str) -> ApplyResult:
        """Create or overwrite a single variable.

        The existing value is looked up directly; if that lookup fails for any
        reason the variable is treated as absent.
        """
        try:
            existing = self._provider.variables.get(self._project_slug, name)
        except TransportError as exc:
            logger.debug("Lookup of %s failed, treating as new: %s", name, exc)
            existing = None

        if existing is not None:
            self._prompt.echo(f"key:{existing.name} already exists as value={existing.value}")
            if not self._prompt.confirm("Do you want to overwrite?"):
                return self._cancel()

        created = self._provider.variables.create(self._project_slug, name, value)
        self._prompt.echo(f"{created.name}={created.value} is created")
        return ApplyResult(applied=[VariableChange(name=created.name, action=Action.CREATE)])

    def upsert_variables(self, desired: Sequence[Variable]) -> ApplyResult:
        """Create or overwrite a batch of variables.

        Overwrites are confirmed once for the whole batch; declining writes
        nothing.
        """
        partition = partition_for_upsert(desired, self._list_remote())
        if partition.needs_confirmation:
            self._prompt.echo("These values already exist.")
            self._show(partition.overwrite)
            if not self._prompt.confirm("Do you want to update all the variables?"):
                return self._cancel()

        result = ApplyResult()
        for v in partition.desired:
            try:
                created = self._provider.variables.create(self._project_slug, v.name, v.value)
            except TransportError as exc:
                logger.error("An error occurred when creating %s, continuing: %s", v.name, exc)
                result.failed.append(
                    VariableFailure(name=v.name, action=Action.CREATE, error=str(exc))
                )
            else:
                self._prompt.echo(f"Created: {created.name}")
                result.applied.append(VariableChange(name=created.name, action=Action.CREATE))
        return result

    def upsert_variables_from_file(
        self, path: Path | str | None, fmt: str | FileFormat | None = None
    ) -> ApplyResult:
        """Read variables from *path* (or stdin when ``None``) and upsert them."""
        file_format = validate_format(fmt)
        if path is None:
            content = self._prompt.read_all(STDIN_MESSAGE)
        else:
            try:
                content = Path(path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ParseError(f"Failed to read {path}: {exc}") from exc
        desired = parse_variables(content, file_format)
        logger.info("Read %d variables (%s)", len(desired), file_format.value)
        return self.upsert_variables(desired)
