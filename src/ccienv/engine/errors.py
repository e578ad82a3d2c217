"""Engine error types."""

from __future__ import annotations


class CcienvError(Exception):
    """Base exception for ccienv errors."""


class ParseError(CcienvError):
    """Raised when variable input (file or stdin) cannot be parsed."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class ValidationError(CcienvError):
    """Raised for invalid requests detected before any API call."""


class UnsupportedFormatError(ParseError, ValidationError):
    """Raised when the input format specifier is not recognized."""

    def __init__(self, fmt: str) -> None:
        super().__init__(f"unsupported format: {fmt!r} (expected 'json' or 'dotenv')")
        self.format = fmt


class TransportError(CcienvError):
    """Raised when a CircleCI API call fails at the network or HTTP level.

    The original exception is chained via ``__cause__`` and also kept on
    ``cause`` so callers can inspect the status code.
    """

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause

    @property
    def status_code(self) -> int | None:
        response = getattr(self.cause, "response", None)
        return getattr(response, "status_code", None)


class ApplyCanceled(CcienvError):
    """Raised when an interactive prompt is interrupted (e.g., Ctrl-C)."""
