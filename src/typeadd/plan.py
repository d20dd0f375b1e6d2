# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Aggregate resolution outcomes into a status report and install commands."""

from __future__ import annotations

import shlex
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from rich.text import Text

from .config import PackageManager
from .models import Outcome, Status

Command = tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ManagerSyntax:
    """How a package manager spells an install."""

    executable: str
    add: tuple[str, ...]
    dev_flag: str
    workspace_root_flag: str | None


MANAGER_SYNTAX: Final[dict[PackageManager, ManagerSyntax]] = {
    PackageManager.YARN: ManagerSyntax("yarn", ("add",), "-D", "-W"),
    PackageManager.PNPM: ManagerSyntax("pnpm", ("add",), "-D", "-w"),
    PackageManager.NPM: ManagerSyntax("npm", ("install",), "--save-dev", None),
}


@dataclass(frozen=True, slots=True)
class StatusStyle:
    tag: str
    tag_style: str
    color: str


STATUS_STYLES: Final[dict[Status, StatusStyle]] = {
    Status.ERROR: StatusStyle("Error:", "bold underline on red", "red"),
    Status.WARN: StatusStyle("Warn:", "bold underline on yellow", "yellow"),
    Status.OK: StatusStyle("Ok:", "bold underline on green", "green"),
}

REPORT_ORDER: Final[tuple[Status, ...]] = (Status.ERROR, Status.WARN, Status.OK)


@dataclass(frozen=True, slots=True)
class InstallPlan:
    """Packages to install, split into regular and development groups."""

    declaration_targets: tuple[str, ...]
    dev_targets: tuple[str, ...]
    regular_targets: tuple[str, ...]

    @property
    def dev_install_set(self) -> tuple[str, ...]:
        return self.declaration_targets + self.dev_targets

    @property
    def is_empty(self) -> bool:
        return not self.dev_install_set and not self.regular_targets


def build_install_plan(outcomes: Iterable[Outcome]) -> InstallPlan:
    """Partition *outcomes* into install targets.

    Declaration packages always land in the development group. Packages that
    failed to resolve are left out entirely.
    """

    declaration_targets: list[str] = []
    dev_targets: list[str] = []
    regular_targets: list[str] = []
    for outcome in outcomes:
        if outcome.declaration_package is not None:
            declaration_targets.append(outcome.declaration_package)
        if not outcome.installable:
            continue
        if outcome.is_dev_dependency:
            dev_targets.append(outcome.package)
        else:
            regular_targets.append(outcome.package)
    return InstallPlan(
        declaration_targets=tuple(declaration_targets),
        dev_targets=tuple(dev_targets),
        regular_targets=tuple(regular_targets),
    )


def build_commands(
    plan: InstallPlan,
    manager: PackageManager = PackageManager.YARN,
    *,
    ignore_workspace_root_check: bool = False,
) -> list[Command]:
    """Return the install commands for *plan*, regular dependencies first.

    Each command is an argument vector; package names are never passed
    through a shell.
    """

    syntax = MANAGER_SYNTAX[manager]
    suffix: tuple[str, ...] = ()
    if ignore_workspace_root_check and syntax.workspace_root_flag:
        suffix = (syntax.workspace_root_flag,)

    commands: list[Command] = []
    if plan.regular_targets:
        commands.append((syntax.executable, *syntax.add, *plan.regular_targets, *suffix))
    if plan.dev_install_set:
        commands.append((syntax.executable, *syntax.add, *plan.dev_install_set, syntax.dev_flag, *suffix))
    return commands


def render_command(commands: Sequence[Command]) -> str:
    """Return the shell-equivalent display form of *commands*."""

    return " && ".join(shlex.join(command) for command in commands)


def render_outcome(outcome: Outcome) -> Text:
    """Render one ``<tag> <package> <message>`` status line."""

    style = STATUS_STYLES[outcome.status]
    text = Text()
    text.append(style.tag, style=style.tag_style)
    text.append(f" {outcome.package} ", style=f"bold {style.color}")
    text.append(outcome.message, style=style.color)
    return text


def render_failure(message: str) -> Text:
    """Render an install failure in the error style."""

    style = STATUS_STYLES[Status.ERROR]
    text = Text()
    text.append(style.tag, style=style.tag_style)
    text.append(f" {message}", style=style.color)
    return text


def render_report(outcomes: Sequence[Outcome]) -> list[Text]:
    """Return status lines grouped as errors, then warnings, then successes."""

    lines: list[Text] = []
    for status in REPORT_ORDER:
        lines.extend(render_outcome(outcome) for outcome in outcomes if outcome.status is status)
    return lines


__all__ = [
    "Command",
    "InstallPlan",
    "MANAGER_SYNTAX",
    "ManagerSyntax",
    "build_commands",
    "build_install_plan",
    "render_command",
    "render_failure",
    "render_outcome",
    "render_report",
]
