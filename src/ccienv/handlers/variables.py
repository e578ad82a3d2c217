"""Handler for CircleCI project environment variables."""

from __future__ import annotations

import logging

from ccienv.engine.errors import TransportError
from ccienv.engine.types import Variable, VariableListing
from ccienv.handlers.base import BaseHandler

logger = logging.getLogger(__name__)


class VariableHandler(BaseHandler):
    """CRUD for ``/project/{slug}/envvar``.

    The API masks stored values (``xxxx`` plus the last four characters), so
    values read back are for display only.
    """

    def _envvar_url(self, project_slug: str, name: str | None = None) -> str:
        if name is None:
            return self._url("project", project_slug, "envvar")
        return self._url("project", project_slug, "envvar", self._quote(name))

    def list(self, project_slug: str) -> VariableListing:
        """List the first page of variables.

        Only one page is fetched; ``VariableListing.incomplete`` tells whether
        the API had more.
        """
        listing = self._call(
            "list variables",
            "GET",
            self._envvar_url(project_slug),
            parse=VariableListing.model_validate,
        )
        logger.debug("Listed %d variables for %s", len(listing.items), project_slug)
        return listing

    def get(self, project_slug: str, name: str) -> Variable | None:
        """Get a variable by name. Returns None if it does not exist."""
        try:
            return self._call(
                "get variable",
                "GET",
                self._envvar_url(project_slug, name),
                parse=Variable.model_validate,
            )
        except TransportError as exc:
            if exc.status_code == 404:
                return None
            raise

    def create(self, project_slug: str, name: str, value: str) -> Variable:
        """Create a variable, overwriting any existing one with the same name."""
        return self._call(
            "create variable",
            "POST",
            self._envvar_url(project_slug),
            json={"name": name, "value": value},
            parse=Variable.model_validate,
        )

    def delete(self, project_slug: str, name: str) -> None:
        self._request("delete variable", "DELETE", self._envvar_url(project_slug, name))
