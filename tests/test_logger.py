from __future__ import annotations

import logging

import pytest

from glossary_bot.logger import resolve_log_level


@pytest.mark.parametrize(
    "name, expected",
    [
        (None, logging.DEBUG),
        ("info", logging.INFO),
        (" WARNING ", logging.WARNING),
        ("verbose", logging.DEBUG),
        ("", logging.DEBUG),
    ],
)
def test_resolve_log_level(name, expected):
    assert resolve_log_level(name) == expected
