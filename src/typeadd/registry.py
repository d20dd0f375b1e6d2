# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry page lookups and type-declaration detection."""

from __future__ import annotations

import logging
import re
from types import TracebackType
from typing import Final

import requests

from .config import DEFAULT_REGISTRY_URL
from .models import Fetched, FetchFailed, LookupResult

LOGGER = logging.getLogger(__name__)

DECLARATION_SCOPE: Final[str] = "@types/"
# Unanchored: the phrase anywhere on the page counts, including unrelated prose.
BUILT_IN_TYPES_PATTERN: Final[re.Pattern[str]] = re.compile(r"built-in type declarations")


def has_built_in_types(body: str) -> bool:
    """Return ``True`` when a registry page states the package ships its own types."""

    return BUILT_IN_TYPES_PATTERN.search(body) is not None


def declaration_package_name(package: str) -> str:
    """Return the companion ``@types`` package name for *package*."""

    return f"{DECLARATION_SCOPE}{package}"


def package_url(package: str, *, base_url: str = DEFAULT_REGISTRY_URL) -> str:
    """Return the registry page URL for *package*."""

    return f"{base_url}{package}"


class RegistryClient:
    """Fetch package pages from the registry website.

    Every failure (connection problems, HTTP 404, any other HTTP error) is
    folded into :class:`FetchFailed`; callers never see an exception.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._owns_session = session is None

    def fetch(self, package: str) -> LookupResult:
        """Fetch the registry page for *package*."""

        url = package_url(package, base_url=self.base_url)
        LOGGER.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.debug("GET %s failed: %s", url, exc)
            return FetchFailed(url=url, reason=str(exc))
        return Fetched(url=url, body=response.text)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = [
    "BUILT_IN_TYPES_PATTERN",
    "DECLARATION_SCOPE",
    "RegistryClient",
    "declaration_package_name",
    "has_built_in_types",
    "package_url",
]
