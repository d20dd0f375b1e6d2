# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for registry lookups and built-in type detection."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from typeadd.models import Fetched, FetchFailed
from typeadd.registry import (
    RegistryClient,
    declaration_package_name,
    has_built_in_types,
    package_url,
)


class _FakeResponse:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error: Not Found")


class _FakeSession:
    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, float | None]] = []
        self.closed = False

    def get(self, url: str, timeout: float | None = None) -> _FakeResponse:
        self.calls.append((url, timeout))
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


def test_has_built_in_types_matches_marker_phrase(typed_page: str, untyped_page: str) -> None:
    assert has_built_in_types(typed_page)
    assert not has_built_in_types(untyped_page)


def test_has_built_in_types_is_case_sensitive() -> None:
    assert not has_built_in_types("Built-In Type Declarations")


def test_has_built_in_types_matches_incidental_mentions() -> None:
    assert has_built_in_types("<p>We removed our built-in type declarations last year.</p>")


def test_declaration_package_name_and_url() -> None:
    assert declaration_package_name("lodash") == "@types/lodash"
    assert package_url("@types/lodash") == "https://www.npmjs.com/package/@types/lodash"
    assert package_url("x", base_url="http://localhost/p/") == "http://localhost/p/x"


def test_fetch_returns_body_on_success(typed_page: str) -> None:
    url = "https://www.npmjs.com/package/zod"
    session = _FakeSession({url: _FakeResponse(200, typed_page)})
    client = RegistryClient(session=session, timeout=3.0)

    result = client.fetch("zod")

    assert isinstance(result, Fetched)
    assert result.body == typed_page
    assert session.calls == [(url, 3.0)]


def test_fetch_folds_http_errors_into_failure() -> None:
    url = "https://www.npmjs.com/package/@types/zod"
    session = _FakeSession({url: _FakeResponse(404)})

    result = RegistryClient(session=session).fetch("@types/zod")

    assert isinstance(result, FetchFailed)
    assert "404" in result.reason
    assert result.url == url


@pytest.mark.parametrize(
    "exc",
    [requests.ConnectionError("connection refused"), requests.Timeout("read timed out")],
)
def test_fetch_folds_network_errors_into_failure(exc: Exception) -> None:
    url = "https://www.npmjs.com/package/react"
    session = _FakeSession({url: exc})

    result = RegistryClient(session=session).fetch("react")

    assert isinstance(result, FetchFailed)
    assert result.reason == str(exc)


def test_client_leaves_injected_session_open() -> None:
    session = _FakeSession({})

    with RegistryClient(session=session):
        pass

    assert not session.closed


def test_client_closes_its_own_session(monkeypatch: pytest.MonkeyPatch) -> None:
    closed: list[bool] = []
    monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(True))

    with RegistryClient():
        pass

    assert closed == [True]
