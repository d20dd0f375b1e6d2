# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the typeadd package."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, model_validator


class Status(str, Enum):
    """Resolution status of a single requested package."""

    ERROR = "error"
    WARN = "warn"
    OK = "ok"


class PackageSpec(BaseModel):
    """Package identifier parsed from the command line."""

    model_config = ConfigDict(frozen=True)

    name: str
    dev: bool = False


class Outcome(BaseModel):
    """Result of resolving one package against the registry."""

    model_config = ConfigDict(frozen=True)

    package: str
    status: Status
    message: str
    declaration_package: str | None = None
    is_dev_dependency: bool = False

    @model_validator(mode="after")
    def _declaration_requires_ok(self) -> Outcome:
        """Reject a declaration package on anything but a successful lookup."""
        if self.declaration_package is not None and self.status is not Status.OK:
            raise ValueError(
                f"declaration_package is only valid for ok outcomes (got {self.status.value})",
            )
        return self

    @property
    def installable(self) -> bool:
        return self.status is not Status.ERROR


class Fetched(BaseModel):
    """Registry page retrieved successfully."""

    model_config = ConfigDict(frozen=True)

    url: str
    body: str

    @property
    def ok(self) -> bool:
        return True


class FetchFailed(BaseModel):
    """Registry page could not be retrieved."""

    model_config = ConfigDict(frozen=True)

    url: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


LookupResult = Union[Fetched, FetchFailed]


__all__ = [
    "FetchFailed",
    "Fetched",
    "LookupResult",
    "Outcome",
    "PackageSpec",
    "Status",
]
