# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console output helpers."""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from typeadd.logging import configure_logging, emoji, fail, info, ok, warn


def test_emoji_toggle() -> None:
    assert emoji("✅ ", True) == "✅ "
    assert emoji("✅ ", False) == ""


@pytest.mark.parametrize(
    ("helper", "symbol"),
    [(info, "ℹ️"), (ok, "✅"), (warn, "⚠️"), (fail, "❌")],
)
def test_helpers_print_plain_text_without_colour(capsys, helper, symbol: str) -> None:
    helper("hello", use_emoji=False, use_color=False)
    plain = capsys.readouterr().out
    assert plain == "hello\n"

    helper("hello", use_emoji=True, use_color=False)
    assert symbol in capsys.readouterr().out


def test_configure_logging_toggles_rich_handler() -> None:
    logger = logging.getLogger("typeadd")

    configure_logging(True)
    assert logger.level == logging.DEBUG
    assert sum(isinstance(handler, RichHandler) for handler in logger.handlers) == 1

    configure_logging(True)
    assert sum(isinstance(handler, RichHandler) for handler in logger.handlers) == 1

    configure_logging(False)
    assert logger.level == logging.WARNING
    assert not any(isinstance(handler, RichHandler) for handler in logger.handlers)
