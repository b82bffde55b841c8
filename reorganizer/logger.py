import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "reorganizer"


def get_logger(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Logger handed to every component. INFO with verbose, WARNING otherwise."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)

    # Rebuild on every call so repeated runs in one process don't stack handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
