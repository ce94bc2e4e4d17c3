"""
Logging setup for the command line.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(log_level: int = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """
    Route log records through Rich on stderr.

    Args:
        log_level: Level for the root logger
        console: Optional Rich console to write to

    Returns:
        The configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        log_time_format=DATE_FORMAT,
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    return root_logger
