"""Engine types (variables, partitions, apply results)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Variable(BaseModel):
    """A single project environment variable."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    value: str


class VariableListing(BaseModel):
    """First page of a project's variables as reported by the API."""

    items: list[Variable] = Field(default_factory=list)
    next_page_token: str | None = None

    @property
    def incomplete(self) -> bool:
        """True when the API reported more pages that were not fetched."""
        return bool(self.next_page_token)


class DeletePartition(BaseModel):
    found: list[Variable] = Field(default_factory=list)
    not_found: list[str] = Field(default_factory=list)


class UpsertPartition(BaseModel):
    """Desired variables split by whether they already exist remotely.

    ``overwrite`` holds the *remote* variables (current values) so they can be
    shown before confirmation; ``desired`` is what will be written.
    """

    desired: list[Variable] = Field(default_factory=list)
    new: list[Variable] = Field(default_factory=list)
    overwrite: list[Variable] = Field(default_factory=list)

    @property
    def needs_confirmation(self) -> bool:
        return bool(self.overwrite)


class Action(str, Enum):
    CREATE = "create"
    DELETE = "delete"


class VariableChange(BaseModel):
    name: str
    action: Action


class VariableFailure(BaseModel):
    name: str
    action: Action
    error: str


class ApplyResult(BaseModel):
    applied: list[VariableChange] = Field(default_factory=list)
    failed: list[VariableFailure] = Field(default_factory=list)
    canceled: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> dict[str, int]:
        counts = {a.value: 0 for a in Action}
        for c in self.applied:
            counts[c.action.value] += 1
        counts["failed"] = len(self.failed)
        return counts
