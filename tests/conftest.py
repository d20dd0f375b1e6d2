# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import threading
from collections.abc import Mapping

import pytest

from typeadd.console import get_console_manager
from typeadd.models import Fetched, FetchFailed, LookupResult

TYPED_PAGE = "<html><body><span>This package contains built-in type declarations</span></body></html>"
UNTYPED_PAGE = "<html><body><p>A plain JavaScript package.</p></body></html>"


class FakeFetcher:
    """Serve canned registry pages and record every lookup."""

    def __init__(self, pages: Mapping[str, str]) -> None:
        self.pages = dict(pages)
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, package: str) -> LookupResult:
        with self._lock:
            self.calls.append(package)
        url = f"https://www.npmjs.com/package/{package}"
        if package in self.pages:
            return Fetched(url=url, body=self.pages[package])
        return FetchFailed(url=url, reason="Request failed with status code 404")


@pytest.fixture
def fake_fetcher() -> type[FakeFetcher]:
    """Return the fake fetcher class so tests can seed their own pages."""
    return FakeFetcher


@pytest.fixture(autouse=True)
def _reset_consoles() -> None:
    """Drop cached consoles so each test sees its own captured stdout."""
    get_console_manager().clear()


@pytest.fixture
def typed_page() -> str:
    return TYPED_PAGE


@pytest.fixture
def untyped_page() -> str:
    return UNTYPED_PAGE
