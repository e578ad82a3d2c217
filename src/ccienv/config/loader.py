"""YAML configuration file loader and writer."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML

from ccienv.config.schema import Config
from ccienv.core.provider import DEFAULT_HOST

logger = logging.getLogger(__name__)

APP_NAME = "ccienv"
CONFIG_FILENAME = "config.yml"


class ConfigError(Exception):
    """Raised for configuration loading / validation errors."""


# File key → Config field.
_FILE_KEYS: dict[str, str] = {
    "apitoken": "api_token",
    "organizationname": "organization_name",
    "host": "host",
    "vcs": "vcs",
}


def config_path() -> Path:
    """Location of the config file, honouring ``XDG_CONFIG_HOME``."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME / CONFIG_FILENAME


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    return yaml


def _read_raw(path: Path) -> dict[str, Any]:
    try:
        raw = _yaml().load(path)
    except Exception as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Failed to read {path}: expected a mapping, got {type(raw).__name__}")

    resolved: dict[str, Any] = {}
    for key, val in raw.items():
        field = _FILE_KEYS.get(str(key).lower())
        if field is None:
            logger.debug("Ignoring unknown config key %r in %s", key, path)
            continue
        if val not in (None, ""):
            resolved[field] = val
    return resolved


def load_config(path: Path | str | None = None) -> Config:
    """Load the config file and return a ``Config`` object.

    A missing file is not an error: values then come from ``CCIENV_*``
    environment variables only.

    Raises:
        ConfigError: On YAML parse errors or validation failures.
    """
    path = Path(path) if path is not None else config_path()
    raw = _read_raw(path) if path.is_file() else {}
    if not raw:
        logger.debug("No config values in %s", path)

    try:
        config = Config(**raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    logger.info("Loaded config from %s", path)
    return config


def write_config(config: Config, path: Path | str | None = None) -> Path:
    """Write *config* as YAML, readable only by the current user."""
    path = Path(path) if path is not None else config_path()
    data: dict[str, Any] = {
        "apitoken": config.api_token.get_secret_value() if config.api_token else "",
        "organizationname": config.organization_name or "",
    }
    if config.host != DEFAULT_HOST:
        data["host"] = config.host
    if config.vcs != "gh":
        data["vcs"] = config.vcs

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            # The mode above only applies to new files.
            os.chmod(path, 0o600)
            _yaml().dump(data, f)
    except OSError as exc:
        raise ConfigError(f"Failed to write {path}: {exc}") from exc

    logger.info("Wrote config to %s", path)
    return path
