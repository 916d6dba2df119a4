"""Logging setup: stdlib logging rendered through rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "menta"


def configure_logging(debug: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a single RichHandler to the menta logger and return it.

    Safe to call more than once; earlier handlers are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    # Markup stays off by default: issue text and source code are full of [brackets].
    handler = RichHandler(console=console or Console(), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger
