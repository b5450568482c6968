"""
Tests for the numeric and console helpers.
"""

import pytest
from core.logging import format_context, get_logger
from core.utils import clamp, make_bar, round_half_up


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (33.333, 33), (-0.5, -1), (0.0, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-2, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_make_bar():
    assert make_bar(5, 10, length=4) == "[white]▮▮[/][dim white]▯▯[/]"
    assert make_bar(20, 10, length=2, color="green") == "[green]▮▮[/][dim white][/]"
    assert make_bar(3, 0, length=3) == "[white][/][dim white]▯▯▯[/]"


def test_engine_loggers_share_a_namespace():
    assert get_logger("ai").name == "crawler.ai"
    assert get_logger("crawler.messages").name == "crawler.messages"


def test_format_context():
    assert format_context("moved", None) == "moved"
    assert format_context("moved", {"turn": 3, "to": (1, 2)}) == "moved [turn=3 to=(1, 2)]"
