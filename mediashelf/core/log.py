"""Logging setup shared by the CLI and the admin API."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import AppInfo


def setup_logging(verbose: bool = False, console: Console = None) -> logging.Logger:
    """Attach a rich handler to the application logger once."""
    logger = logging.getLogger(AppInfo.NAME)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        # Avoid duplicate lines through the root logger
        logger.propagate = False
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
