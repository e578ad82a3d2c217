"""Configuration loading and convenience constructors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccienv.config.loader import ConfigError, config_path, load_config, write_config
from ccienv.config.schema import Config
from ccienv.core.provider import ApiKeyAuth, CircleCIProvider
from ccienv.engine.engine import VariablesEngine

if TYPE_CHECKING:
    from pathlib import Path

    from ccienv.engine.prompt import Prompter

__all__ = [
    "Config",
    "ConfigError",
    "config_path",
    "engine",
    "load",
    "load_config",
    "provider",
    "save",
    "write_config",
]


def load(path: Path | str | None = None) -> Config:
    """Load the configuration (file + ``CCIENV_*`` environment)."""
    return load_config(path)


def save(config: Config, path: Path | str | None = None) -> Path:
    """Persist the configuration file."""
    return write_config(config, path)


def provider(config: Config) -> CircleCIProvider:
    """Build a ``CircleCIProvider`` from a ``Config`` instance."""
    if config.api_token is None or not config.api_token.get_secret_value():
        raise ConfigError(
            "API token is not configured (run `ccienv config` or set CCIENV_API_TOKEN)"
        )
    return CircleCIProvider(host=config.host, auth=ApiKeyAuth(api_key=config.api_token))


def engine(
    config: Config,
    repo: str,
    *,
    prompt: Prompter,
    org: str | None = None,
    vcs: str | None = None,
) -> VariablesEngine:
    """Build a ``VariablesEngine`` bound to ``<vcs>/<org>/<repo>``."""
    return VariablesEngine(
        provider=provider(config),
        project_slug=config.project_slug(repo, org=org, vcs=vcs),
        prompt=prompt,
    )
