"""Pure reconciliation between requested and remote variables.

Nothing in this module talks to the API or the terminal; the effectful flows
in :mod:`ccienv.engine.engine` are built on top of these functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccienv.engine.errors import ValidationError
from ccienv.engine.types import DeletePartition, UpsertPartition, Variable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def _by_name(variables: Iterable[Variable]) -> dict[str, Variable]:
    # Later entries replace earlier ones with the same name.
    return {v.name: v for v in variables}


def partition_for_delete(
    requested_names: Sequence[str], remote: Sequence[Variable]
) -> DeletePartition:
    """Split *requested_names* into variables present remotely and names that are not.

    Both outputs follow the order of *requested_names*.
    """
    lookup = _by_name(remote)
    found: list[Variable] = []
    not_found: list[str] = []
    for name in requested_names:
        if name in lookup:
            found.append(lookup[name])
        else:
            not_found.append(name)
    return DeletePartition(found=found, not_found=not_found)


def dedupe_last_wins(desired: Sequence[Variable]) -> list[Variable]:
    """Collapse duplicate names, keeping the last value at the first position."""
    return list(_by_name(desired).values())


def partition_for_upsert(
    desired: Sequence[Variable], remote: Sequence[Variable]
) -> UpsertPartition:
    """Split *desired* into new variables and ones that would overwrite a remote value."""
    lookup = _by_name(remote)
    unique = dedupe_last_wins(desired)
    new: list[Variable] = []
    overwrite: list[Variable] = []
    for v in unique:
        existing = lookup.get(v.name)
        if existing is None:
            new.append(v)
        else:
            overwrite.append(existing)
    return UpsertPartition(desired=unique, new=new, overwrite=overwrite)


def format_variable_lines(variables: Sequence[Variable]) -> list[str]:
    """Render ``name value`` lines with names padded to the widest name."""
    if not variables:
        return []
    width = max(len(v.name) for v in variables)
    return [f"{v.name.ljust(width)} {v.value}" for v in variables]


def resolve_selection(variables: Sequence[Variable], selected: Sequence[str]) -> list[Variable]:
    """Map display lines chosen by the user back to the original variables.

    Lines are unique because names are unique, so the reverse lookup is exact.
    """
    reverse = {line: i for i, line in enumerate(format_variable_lines(variables))}
    result: list[Variable] = []
    for line in selected:
        if line not in reverse:
            raise ValidationError(f"unknown selection: {line!r}")
        result.append(variables[reverse[line]])
    return result
