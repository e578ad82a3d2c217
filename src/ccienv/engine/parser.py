"""Parse variable definitions from JSON or dotenv content.

Two input formats are supported:

- ``json``: an array of ``{"name": ..., "value": ...}`` objects. Array order is
  preserved.
- ``dotenv``: ``KEY=VALUE`` lines with optional quoting, ``#`` comments, blank
  lines and an optional ``export`` prefix. The result is built from a mapping,
  so ordering is not part of the contract and duplicate keys keep the last
  value. Values are taken literally; ``${VAR}`` references are not expanded.
"""

from __future__ import annotations

import io
import logging
from enum import Enum
from typing import TYPE_CHECKING

from dotenv.parser import parse_stream
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ccienv.engine.errors import ParseError, UnsupportedFormatError
from ccienv.engine.types import Variable

if TYPE_CHECKING:
    from dotenv.parser import Binding

logger = logging.getLogger(__name__)

_VARIABLES = TypeAdapter(list[Variable])


class FileFormat(str, Enum):
    JSON = "json"
    DOTENV = "dotenv"


_FORMATS: dict[str, FileFormat] = {
    "json": FileFormat.JSON,
    "dotenv": FileFormat.DOTENV,
    "": FileFormat.DOTENV,
}


def validate_format(fmt: str | FileFormat | None) -> FileFormat:
    """Resolve a format specifier; empty or ``None`` means dotenv."""
    if isinstance(fmt, FileFormat):
        return fmt
    key = (fmt or "").strip().lower()
    if key not in _FORMATS:
        raise UnsupportedFormatError(fmt or "")
    return _FORMATS[key]


def parse_json(content: str) -> list[Variable]:
    if not content.strip():
        return []
    try:
        return _VARIABLES.validate_json(content)
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False)
        details = "; ".join(
            f"{'.'.join(str(p) for p in e['loc']) or '<root>'}: {e['msg']}" for e in errors
        )
        raise ParseError(f"invalid JSON variables: {details}") from exc


def _statement_line(binding: Binding) -> int:
    # The parser marks a binding before skipping leading blank lines.
    text = binding.original.string
    leading = text[: len(text) - len(text.lstrip())]
    return binding.original.line + leading.count("\n")


def parse_dotenv(content: str) -> list[Variable]:
    env: dict[str, str] = {}
    for binding in parse_stream(io.StringIO(content)):
        if binding.error:
            snippet = binding.original.string.strip()
            raise ParseError(f"cannot parse statement {snippet!r}", line=_statement_line(binding))
        if binding.key is None:
            continue
        if binding.value is None:
            raise ParseError(
                f"missing '=' after key {binding.key!r}", line=_statement_line(binding)
            )
        env[binding.key] = binding.value
    logger.debug("Parsed %d dotenv entries", len(env))
    return [Variable(name=k, value=v) for k, v in env.items()]


def parse_variables(
    content: str, fmt: str | FileFormat | None = FileFormat.DOTENV
) -> list[Variable]:
    """Parse *content* in the given format into a list of variables.

    Raises:
        UnsupportedFormatError: If *fmt* is not ``json`` or ``dotenv``.
        ParseError: If the content is malformed.
    """
    file_format = validate_format(fmt)
    if file_format is FileFormat.JSON:
        return parse_json(content)
    return parse_dotenv(content)
