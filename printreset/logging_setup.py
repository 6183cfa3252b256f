"""Console logging: one timestamped, leveled line per step."""

import logging

from rich.logging import RichHandler

from printreset.ui.console import console

LOG_FORMAT = "%(message)s"
DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"


def setup_logging(verbose: bool = False) -> None:
    """Route the printreset loggers through a RichHandler on the themed console."""
    handler = RichHandler(
        console=console.rich,
        show_time=True,
        show_level=True,
        show_path=verbose,
        markup=False,
        rich_tracebacks=verbose,
        log_time_format=DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("printreset")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
