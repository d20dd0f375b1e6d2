# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve requested packages into install outcomes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Final, Protocol

from .models import Fetched, LookupResult, Outcome, PackageSpec, Status
from .registry import declaration_package_name, has_built_in_types

LOGGER = logging.getLogger(__name__)

DEV_MARKER: Final[str] = "$D"


class PackageFetcher(Protocol):
    """Anything able to fetch a registry page for a package name."""

    def fetch(self, package: str) -> LookupResult: ...


def parse_package_spec(identifier: str) -> PackageSpec:
    """Split an optional trailing ``$D`` marker off *identifier*.

    ``lodash$D`` becomes ``PackageSpec(name="lodash", dev=True)``; anything
    without the trailing marker passes through unchanged.
    """

    raw = identifier.strip()
    if raw.endswith(DEV_MARKER):
        return PackageSpec(name=raw[: -len(DEV_MARKER)], dev=True)
    return PackageSpec(name=raw, dev=False)


def resolve_package(spec: PackageSpec, fetcher: PackageFetcher, *, force_dev: bool = False) -> Outcome:
    """Resolve a single package into an :class:`Outcome`.

    The package page is fetched first. A failure there is an error and stops
    the lookup. When the page mentions built-in declarations the package is
    done; otherwise the ``@types`` companion page decides between ``ok`` with a
    declaration package and ``warn``.
    """

    package = spec.name
    is_dev = spec.dev or force_dev

    result = fetcher.fetch(package)
    if not isinstance(result, Fetched):
        return Outcome(
            package=package,
            status=Status.ERROR,
            message=result.reason,
            is_dev_dependency=is_dev,
        )

    if has_built_in_types(result.body):
        LOGGER.debug("%s ships built-in type declarations", package)
        return Outcome(
            package=package,
            status=Status.OK,
            message=f"Types already exist for {package}",
            is_dev_dependency=is_dev,
        )

    declaration = declaration_package_name(package)
    companion = fetcher.fetch(declaration)
    if not isinstance(companion, Fetched):
        return Outcome(
            package=package,
            status=Status.WARN,
            message=f"Types not found on npm for {declaration}",
            is_dev_dependency=is_dev,
        )

    return Outcome(
        package=package,
        status=Status.OK,
        message=f"Types are valid for {declaration}",
        declaration_package=declaration,
        is_dev_dependency=is_dev,
    )


def resolve_packages(
    identifiers: Sequence[str],
    fetcher: PackageFetcher,
    *,
    force_dev: bool = False,
) -> list[Outcome]:
    """Resolve every identifier concurrently and return outcomes in input order.

    One worker per identifier; all lookups start together and the call
    returns once every one of them has finished.
    """

    specs = [parse_package_spec(identifier) for identifier in identifiers]
    if not specs:
        return []
    resolver = partial(resolve_package, fetcher=fetcher, force_dev=force_dev)
    with ThreadPoolExecutor(max_workers=len(specs)) as executor:
        futures = [executor.submit(resolver, spec) for spec in specs]
        outcomes = [future.result() for future in futures]
    LOGGER.debug("resolved %d package(s)", len(specs))
    return outcomes


__all__ = [
    "DEV_MARKER",
    "PackageFetcher",
    "parse_package_spec",
    "resolve_package",
    "resolve_packages",
]
