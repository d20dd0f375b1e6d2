# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for typeadd."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_REGISTRY_URL: Final[str] = "https://www.npmjs.com/package/"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "typeadd"
CONFIG_FILENAME: Final[str] = ".typeadd.toml"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class PackageManager(str, Enum):
    """Package managers capable of installing npm packages."""

    YARN = "yarn"
    NPM = "npm"
    PNPM = "pnpm"


class Config(BaseModel):
    """Resolved runtime configuration."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    package_manager: PackageManager = PackageManager.YARN
    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: float | None = Field(default=None, gt=0)
    use_emoji: bool = True

    @field_validator("registry_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        """Registry URLs are joined by concatenation and need a trailing slash."""
        value = value.strip()
        if not value:
            raise ValueError("registry_url must not be empty")
        return value if value.endswith("/") else f"{value}/"

    def with_overrides(self, **overrides: Any) -> Config:
        """Return a copy with non-``None`` *overrides* applied and validated."""
        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return Config.model_validate(payload)
        except ValidationError as exc:
            raise ConfigError(_format_validation_error(exc)) from exc


class ConfigLoader:
    """Merge defaults, ``pyproject.toml`` and ``.typeadd.toml`` for a project root."""

    def __init__(self, root: Path, *, env: Mapping[str, str] | None = None) -> None:
        self.root = root
        self._env = env if env is not None else os.environ

    @classmethod
    def for_root(cls, root: Path) -> ConfigLoader:
        return cls(root.resolve())

    def sources(self) -> list[Path]:
        """Return the configuration files consulted, lowest precedence first."""
        candidates = [self.root / "pyproject.toml", self.root / CONFIG_FILENAME]
        return [path for path in candidates if path.is_file()]

    def load(self) -> Config:
        merged: dict[str, Any] = {}
        for path in self.sources():
            merged.update(self._load_fragment(path))
        merged = {key: _expand_env(value, self._env) for key, value in merged.items()}
        try:
            return Config.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(_format_validation_error(exc)) from exc

    def _load_fragment(self, path: Path) -> Mapping[str, Any]:
        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
        if path.name != "pyproject.toml":
            return data
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
        return dict(section)


def _expand_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "config"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_REGISTRY_URL",
    "Config",
    "ConfigError",
    "ConfigLoader",
    "PackageManager",
]
