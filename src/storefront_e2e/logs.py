"""Logging setup for the suite."""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "storefront_e2e"

_handler: RichHandler | None = None


def configure_logging(level: int | str = logging.INFO, console: Console | None = None) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Safe to call more than once; the handler is installed a single time and
    only the level is updated on later calls.
    """
    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if _handler is None:
        _handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        _handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(_handler)

    return logger
