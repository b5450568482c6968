"""
Logging configuration module for the engine.

Engine internals trace their decisions at debug level through ``log_debug``;
user-visible events go to the message log instead, which mirrors them to the
``crawler.messages`` logger. ``setup_logging`` routes everything through a
rich handler.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Loggers of the engine live under this namespace.
ROOT_LOGGER = "crawler"


def setup_logging(level: int = logging.INFO, width: int = 120) -> None:
    """
    Sets up logging configuration with rich colored output.

    Args:
        level (int):
            The logging level of the engine loggers. Defaults to logging.INFO.
        width (int):
            The console width used by the handler.

    """
    console = Console(width=width, force_terminal=True, force_jupyter=False)

    rich_handler = RichHandler(
        console=console,
        show_time=False,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))

    engine_logger = logging.getLogger(ROOT_LOGGER)
    engine_logger.handlers = [rich_handler]
    engine_logger.setLevel(level)
    engine_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Returns ``name`` as a child of the engine logger namespace."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


logger = get_logger(ROOT_LOGGER)


def format_context(message: str, context: dict[str, Any] | None) -> str:
    """Appends ``context`` to ``message`` as ``key=value`` pairs."""
    if not context:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} [{pairs}]"


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Traces an engine decision.

    Args:
        message (str):
            What happened.
        context (dict[str, Any] | None):
            Details such as the turn, the actor id or the chosen target.

    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(format_context(message, context))
