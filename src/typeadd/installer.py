# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run package-manager install commands."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any

from .plan import Command
from .process_utils import run_command

LOGGER = logging.getLogger(__name__)

Runner = Callable[[Command], CompletedProcess[Any]]
Notify = Callable[[str], None]


@dataclass(slots=True)
class InstallResult:
    """Aggregated details about an installation run."""

    completed: list[Command] = field(default_factory=list)
    failed: Command | None = None
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.failed is None


def default_runner(cwd: Path | None = None) -> Runner:
    """Return a runner that streams stdout and collects stderr."""

    def _run(command: Command) -> CompletedProcess[Any]:
        return run_command(command, cwd=cwd, check=False, capture_stderr=True)

    return _run


def run_install(
    commands: Sequence[Command],
    *,
    runner: Runner,
    on_command: Notify | None = None,
    on_error: Notify | None = None,
) -> InstallResult:
    """Execute *commands* in order, stopping after the first failure.

    Anything a command writes to stderr is handed to *on_error*, even when
    it exits successfully. A missing executable raises ``FileNotFoundError``.
    """

    result = InstallResult()
    for command in commands:
        if on_command is not None:
            on_command(" ".join(command))
        LOGGER.debug("running %s", command)
        completed = runner(command)
        stderr = (completed.stderr or "").strip() if isinstance(completed.stderr, str) else ""
        if stderr and on_error is not None:
            on_error(stderr)
        if completed.returncode != 0:
            if not stderr and on_error is not None:
                on_error(f"Command '{command[0]}' exited with status {completed.returncode}")
            result.failed = command
            result.returncode = completed.returncode
            LOGGER.debug("%s exited with %d", command[0], completed.returncode)
            return result
        result.completed.append(command)
    return result


__all__ = ["InstallResult", "Runner", "default_runner", "run_install"]
