"""Reconciliation and confirm-then-apply engine for project variables."""

from ccienv.engine.engine import VariablesEngine
from ccienv.engine.errors import (
    ApplyCanceled,
    CcienvError,
    ParseError,
    TransportError,
    UnsupportedFormatError,
    ValidationError,
)
from ccienv.engine.parser import FileFormat, parse_variables, validate_format
from ccienv.engine.prompt import Prompter
from ccienv.engine.reconcile import (
    format_variable_lines,
    partition_for_delete,
    partition_for_upsert,
    resolve_selection,
)
from ccienv.engine.types import (
    Action,
    ApplyResult,
    DeletePartition,
    UpsertPartition,
    Variable,
    VariableChange,
    VariableFailure,
    VariableListing,
)

__all__ = [
    "Action",
    "ApplyCanceled",
    "ApplyResult",
    "CcienvError",
    "DeletePartition",
    "FileFormat",
    "ParseError",
    "Prompter",
    "TransportError",
    "UnsupportedFormatError",
    "UpsertPartition",
    "ValidationError",
    "Variable",
    "VariableChange",
    "VariableFailure",
    "VariableListing",
    "VariablesEngine",
    "format_variable_lines",
    "parse_variables",
    "partition_for_delete",
    "partition_for_upsert",
    "resolve_selection",
    "validate_format",
]
