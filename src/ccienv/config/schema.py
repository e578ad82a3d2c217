"""Configuration model."""

from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ccienv.core.provider import DEFAULT_HOST


class Config(BaseSettings):
    """Persisted CLI settings.

    Fields are read from the config file (constructor kwargs) or from
    environment variables with the ``CCIENV_`` prefix.  Constructor kwargs take
    precedence.
    """

    model_config = SettingsConfigDict(env_prefix="CCIENV_")

    api_token: SecretStr | None = None
    organization_name: str | None = None
    host: str = DEFAULT_HOST
    vcs: str = "gh"

    def project_slug(self, repo: str, *, org: str | None = None, vcs: str | None = None) -> str:
        """Build ``<vcs>/<org>/<repo>``; *org* and *vcs* override the configured values."""
        organization = org or self.organization_name
        if not organization:
            from ccienv.config.loader import ConfigError

            raise ConfigError(
                "organization name is not configured (run `ccienv config` or pass --org)"
            )
        return f"{vcs or self.vcs}/{organization}/{repo}"
