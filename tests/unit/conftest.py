"""Shared fixtures for unit tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from ccienv.engine import Variable, VariableListing

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

_CCIENV_ENV_VARS = (
    "CCIENV_API_TOKEN",
    "CCIENV_ORGANIZATION_NAME",
    "CCIENV_HOST",
    "CCIENV_VCS",
    "CCIENV_LOG",
    "NO_COLOR",
)


@pytest.fixture(autouse=True)
def _clean_ccienv_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove CCIENV_* env vars and point the config dir at a temp dir."""
    for var in _CCIENV_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture(autouse=True)
def _restore_ccienv_logger() -> Iterator[None]:
    """Undo handlers and levels the CLI callback installs on the package logger."""
    log = logging.getLogger("ccienv")
    handlers, level = list(log.handlers), log.level
    yield
    log.handlers[:] = handlers
    log.setLevel(level)


@pytest.fixture
def make_variables() -> Callable[..., list[Variable]]:
    """Factory fixture: ``make_variables(A="1", B="2")`` -> list of variables."""

    def _make(**pairs: str) -> list[Variable]:
        return [Variable(name=k, value=v) for k, v in pairs.items()]

    return _make


@pytest.fixture
def mock_variables() -> MagicMock:
    """A stand-in for ``VariableHandler`` with an empty remote listing."""
    handler = MagicMock()
    handler.list.return_value = VariableListing(items=[])
    handler.get.return_value = None
    handler.create.side_effect = lambda _slug, name, value: Variable(name=name, value=value)
    return handler


@pytest.fixture
def provider(mock_variables: MagicMock) -> MagicMock:
    """Provider double whose ``variables`` handler is ``mock_variables``."""
    p = MagicMock()
    p.variables = mock_variables
    return p


@pytest.fixture
def prompt() -> MagicMock:
    p = MagicMock()
    p.confirm.return_value = True
    return p
