"""
Utilities module for the engine.

Console output through a shared rich console, plus the small numeric helpers
used by the combat rules.
"""

from typing import Any

from rich.console import Console
from rich.rule import Rule

_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """Prints rich markup through the engine console."""
    _console.print(*args, **kwargs)


def crule(title: str = "", **kwargs: Any) -> None:
    """Prints a horizontal rule, ``kwargs`` go to ``rich.rule.Rule``."""
    _console.print(Rule(title, **kwargs))


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Clamps value into [minimum, maximum]."""
    return max(minimum, min(maximum, value))


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer, halves away from zero."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Renders a pool such as hit points as a rich markup gauge.

    Args:
        current (int):
            The current value, clamped into [0, maximum].
        maximum (int):
            The size of the pool. An empty pool renders an empty gauge.
        length (int):
            The number of cells.
        color (str):
            The colour of the filled cells.

    Returns:
        str:
            The markup of the gauge.

    """
    filled = 0
    if maximum > 0:
        filled = clamp(current, 0, maximum) * length // maximum
    return f"[{color}]{'▮' * filled}[/][dim white]{'▯' * (length - filled)}[/]"
