# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``typeadd`` install command."""

from __future__ import annotations

from pathlib import Path

import typer

from .. import __version__
from ..config import Config, ConfigError, ConfigLoader, PackageManager
from ..installer import InstallResult, default_runner, run_install
from ..logging import configure_logging, fail, info, ok, print_text
from ..plan import build_commands, build_install_plan, render_command, render_failure, render_report
from ..registry import RegistryClient
from ..resolver import resolve_packages


def _version_callback(value: bool) -> None:
    if value:
        print_text(f"typeadd {__version__}", use_color=False)
        raise typer.Exit(code=0)


def add_command(
    packages: list[str] = typer.Argument(
        ...,
        metavar="PACKAGES...",
        help="Packages to add. Suffix a name with '$D' to add it as a dev dependency.",
    ),
    dev: bool = typer.Option(
        False,
        "--dev",
        "-D",
        help="Add every package as a dev dependency.",
    ),
    ignore_workspace_root_check: bool = typer.Option(
        False,
        "--ignore-workspace-root-check",
        "-W",
        help="Allow installing at a workspace root.",
    ),
    manager: PackageManager | None = typer.Option(
        None,
        "--manager",
        "-m",
        case_sensitive=False,
        help="Package manager used for the install (default: yarn).",
    ),
    registry_url: str | None = typer.Option(
        None,
        "--registry-url",
        help="Base URL of registry package pages.",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.0,
        help="Per-request timeout in seconds (default: none).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the install command without running it.",
    ),
    root: Path = typer.Option(
        Path.cwd(),
        "--root",
        "-r",
        help="Project directory searched for configuration and used for the install.",
    ),
    emoji: bool | None = typer.Option(
        None,
        "--emoji/--no-emoji",
        help="Toggle emoji in CLI output.",
    ),
    color: bool | None = typer.Option(
        None,
        "--color/--no-color",
        help="Toggle colour output on a terminal.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log registry lookups and commands to stderr.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Add npm packages together with their type declarations."""
    configure_logging(verbose)
    resolved_root = root.resolve()
    config = _load_config(
        resolved_root,
        manager=manager,
        registry_url=registry_url,
        timeout=timeout or None,
        use_emoji=emoji,
        color=color,
    )
    use_emoji = config.use_emoji

    with RegistryClient(base_url=config.registry_url, timeout=config.timeout) as client:
        outcomes = resolve_packages(packages, client, force_dev=dev)

    for line in render_report(outcomes):
        print_text(line, use_color=color, use_emoji=use_emoji)

    plan = build_install_plan(outcomes)
    if plan.is_empty:
        print_text("No packages", use_color=color, use_emoji=use_emoji)
        raise typer.Exit(code=0)

    commands = build_commands(
        plan,
        config.package_manager,
        ignore_workspace_root_check=ignore_workspace_root_check,
    )
    if dry_run:
        info(render_command(commands), use_emoji=use_emoji, use_color=color)
        raise typer.Exit(code=0)

    print_text("", use_color=color)
    try:
        result: InstallResult = run_install(
            commands,
            runner=default_runner(resolved_root),
            on_command=lambda line: info(line, use_emoji=use_emoji, use_color=color),
            on_error=lambda message: print_text(render_failure(message), use_color=color),
        )
    except FileNotFoundError as exc:
        fail(str(exc), use_emoji=use_emoji, use_color=color)
        raise typer.Exit(code=1) from exc

    if not result.ok:
        raise typer.Exit(code=1)
    ok("Packages added.", use_emoji=use_emoji, use_color=color)


def _load_config(
    root: Path,
    *,
    manager: PackageManager | None,
    registry_url: str | None,
    timeout: float | None,
    use_emoji: bool | None,
    color: bool | None,
) -> Config:
    try:
        return ConfigLoader.for_root(root).load().with_overrides(
            package_manager=manager,
            registry_url=registry_url,
            timeout=timeout,
            use_emoji=use_emoji,
        )
    except ConfigError as exc:
        fail(f"Configuration invalid: {exc}", use_emoji=use_emoji is not False, use_color=color)
        raise typer.Exit(code=1) from exc


__all__ = ["add_command"]
