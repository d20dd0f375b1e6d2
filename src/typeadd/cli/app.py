# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import typer

from .add import add_command

app = typer.Typer(
    help="Add npm packages together with their type declarations.",
    add_completion=False,
)
app.command(no_args_is_help=True)(add_command)


def main() -> None:
    """Console-script entry point."""
    app()


__all__ = ["app", "main"]
