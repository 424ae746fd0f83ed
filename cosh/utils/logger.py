from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str = "WARNING") -> None:
    """Send cosh.* log records to stderr through rich."""
    name = level.strip().upper()
    if name not in LEVELS:
        name = "WARNING"

    logger = logging.getLogger("cosh")
    logger.setLevel(name)
    logger.handlers.clear()
    logger.propagate = False
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
    )
