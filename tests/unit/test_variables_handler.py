"""Tests for the VariableHandler and ProjectHandler."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from ccienv.core import CircleCIProvider
from ccienv.engine import TransportError, Variable
from ccienv.handlers import ProjectHandler, VariableHandler

BASE = "https://circleci.com/api/v2"
SLUG = "gh/testorg/testprj"


def _response(status: int = 200, payload: Any = None) -> MagicMock:
    response = MagicMock(status_code=status)
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status} Client Error", response=response
        )
    return response


@pytest.fixture
def session() -> MagicMock:
    return MagicMock()


@pytest.fixture
def handler(session: MagicMock) -> VariableHandler:
    return CircleCIProvider.from_session(session).variables


class TestList:
    def test_parses_items(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(
            payload={
                "items": [
                    {"name": "FOO", "value": "xxxx_foo", "created_at": "2024-01-01T00:00:00Z"},
                    {"name": "BAR", "value": "xxxx_bar"},
                ],
                "next_page_token": None,
            }
        )

        listing = handler.list(SLUG)

        session.request.assert_called_once_with(
            "GET", f"{BASE}/project/{SLUG}/envvar", timeout=30.0
        )
        assert listing.items == [
            Variable(name="FOO", value="xxxx_foo"),
            Variable(name="BAR", value="xxxx_bar"),
        ]
        assert not listing.incomplete

    def test_next_page_marks_incomplete(
        self, handler: VariableHandler, session: MagicMock
    ) -> None:
        session.request.return_value = _response(
            payload={"items": [], "next_page_token": "abc"}
        )
        assert handler.list(SLUG).incomplete

    def test_http_error_wrapped(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(status=401)

        with pytest.raises(TransportError, match="list variables") as exc_info:
            handler.list(SLUG)
        assert exc_info.value.status_code == 401
        assert isinstance(exc_info.value.__cause__, requests.HTTPError)

    def test_network_error_wrapped(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(TransportError, match="connection refused") as exc_info:
            handler.list(SLUG)
        assert exc_info.value.status_code is None

    def test_unexpected_payload_wrapped(
        self, handler: VariableHandler, session: MagicMock
    ) -> None:
        session.request.return_value = _response(payload={"items": [{"value": "no-name"}]})

        with pytest.raises(TransportError, match="list variables"):
            handler.list(SLUG)


class TestGet:
    def test_found(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(payload={"name": "K", "value": "xxxxK"})

        assert handler.get(SLUG, "K") == Variable(name="K", value="xxxxK")
        session.request.assert_called_once_with(
            "GET", f"{BASE}/project/{SLUG}/envvar/K", timeout=30.0
        )

    def test_not_found_returns_none(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(status=404)
        assert handler.get(SLUG, "K") is None

    def test_other_errors_raise(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(status=500)
        with pytest.raises(TransportError, match="get variable"):
            handler.get(SLUG, "K")

    def test_name_is_quoted(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(status=404)
        handler.get(SLUG, "A/B")
        url = session.request.call_args.args[1]
        assert url.endswith("/envvar/A%2FB")


class TestCreate:
    def test_posts_name_and_value(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(
            status=201, payload={"name": "K", "value": "xxxxalue"}
        )

        created = handler.create(SLUG, "K", "value")

        session.request.assert_called_once_with(
            "POST",
            f"{BASE}/project/{SLUG}/envvar",
            timeout=30.0,
            json={"name": "K", "value": "value"},
        )
        assert created.name == "K"

    def test_error_wrapped(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(status=400)
        with pytest.raises(TransportError, match="create variable"):
            handler.create(SLUG, "K", "value")


class TestDelete:
    def test_deletes(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(payload={"message": "OK"})

        handler.delete(SLUG, "BAR")

        session.request.assert_called_once_with(
            "DELETE", f"{BASE}/project/{SLUG}/envvar/BAR", timeout=30.0
        )

    def test_error_wrapped(self, handler: VariableHandler, session: MagicMock) -> None:
        session.request.return_value = _response(status=404)
        with pytest.raises(TransportError, match="delete variable"):
            handler.delete(SLUG, "BAR")


class TestProjectHandler:
    def test_get_returns_raw_record(self, session: MagicMock) -> None:
        session.request.return_value = _response(payload={"slug": SLUG, "name": "testprj"})
        handler = ProjectHandler(session, BASE)

        assert handler.get(SLUG) == {"slug": SLUG, "name": "testprj"}
        session.request.assert_called_once_with("GET", f"{BASE}/project/{SLUG}", timeout=30.0)

    def test_invalid_json_wrapped(self, session: MagicMock) -> None:
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        session.request.return_value = response

        with pytest.raises(TransportError, match="show project"):
            ProjectHandler(session, BASE).get(SLUG)
