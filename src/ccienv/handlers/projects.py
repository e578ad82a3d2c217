"""Handler for CircleCI projects."""

from __future__ import annotations

from typing import Any

from ccienv.handlers.base import BaseHandler


class ProjectHandler(BaseHandler):
    """Handler for CircleCI project operations."""

    def get(self, project_slug: str) -> dict[str, Any]:
        """Get the raw project record."""
        return self._call("show project", "GET", self._url("project", project_slug))
