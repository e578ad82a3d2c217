"""Base handler for CircleCI API resources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import requests

from ccienv.engine.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class BaseHandler:
    """Shared HTTP plumbing for API handlers.

    Every failed call (network error, non-2xx status, undecodable body) is
    raised as :class:`TransportError` tagged with the operation name.
    """

    def __init__(self, session: requests.Session, base_url: str, *, timeout: float = 30.0) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, *segments: str) -> str:
        return "/".join([self.base_url, *segments])

    @staticmethod
    def _quote(segment: str) -> str:
        return quote(segment, safe="")

    def _request(self, operation: str, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(operation, exc) from exc
        return response

    def _json(self, operation: str, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(operation, exc) from exc

    def _call(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        parse: Callable[[Any], Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        response = self._request(operation, method, url, **kwargs)
        data = self._json(operation, response)
        if parse is None:
            return data
        try:
            return parse(data)
        except ValueError as exc:
            raise TransportError(operation, exc) from exc
