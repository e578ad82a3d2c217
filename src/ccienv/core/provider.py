"""CircleCI Provider - Connection configuration for the CircleCI API."""

from functools import cached_property
from typing import TYPE_CHECKING, Self

import requests
from pydantic import BaseModel, ConfigDict, SecretStr

if TYPE_CHECKING:
    from ccienv.handlers.projects import ProjectHandler
    from ccienv.handlers.variables import VariableHandler

DEFAULT_HOST = "https://circleci.com/api/v2"


class ApiKeyAuth(BaseModel):
    """Personal API token authentication for CircleCI."""

    api_key: SecretStr


class CircleCIProvider(BaseModel):
    """Connection configuration for the CircleCI v2 API.

    For normal use, provide auth (and optionally host). For testing, use the
    `from_session` classmethod to inject a session.

    Examples:
        provider = CircleCIProvider(auth=ApiKeyAuth(api_key="my-token"))
        provider.variables.list("gh/my-org/my-repo")
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    host: str = DEFAULT_HOST
    auth: ApiKeyAuth | None = None
    timeout: float = 30.0

    # Injected session (for testing)
    _injected_session: requests.Session | None = None

    @classmethod
    def from_session(cls, session: requests.Session, *, host: str = DEFAULT_HOST) -> Self:
        """Create a provider with an injected session.

        Args:
            session: A pre-configured ``requests.Session`` (or a test double)
            host: API base URL
        """
        provider = cls.model_construct(host=host, auth=None, timeout=30.0)
        provider._injected_session = session
        return provider

    @cached_property
    def session(self) -> requests.Session:
        """Get the HTTP session."""
        if self._injected_session is not None:
            return self._injected_session

        if self.auth is None:
            raise ValueError(
                "Either provide auth, or use CircleCIProvider.from_session() to inject a session"
            )

        session = requests.Session()
        session.headers.update(
            {
                "Circle-Token": self.auth.api_key.get_secret_value(),
                "Accept": "application/json",
            }
        )
        return session

    @property
    def base_url(self) -> str:
        return self.host.rstrip("/")

    # Handlers for each API concept
    @cached_property
    def variables(self) -> "VariableHandler":
        from ccienv.handlers.variables import VariableHandler

        return VariableHandler(self.session, self.base_url, timeout=self.timeout)

    @cached_property
    def projects(self) -> "ProjectHandler":
        from ccienv.handlers.projects import ProjectHandler

        return ProjectHandler(self.session, self.base_url, timeout=self.timeout)
