"""Logging configuration for media-feed."""

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO", verbose: bool = False) -> logging.Logger:
    """Route all loggers through a single rich console handler.

    Args:
        level: Console level name (e.g. "INFO", "WARNING")
        verbose: If True, force DEBUG regardless of ``level``
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else level.upper())

    # Remove existing handlers (avoid duplicates)
    root_logger.handlers.clear()

    handler = RichHandler(show_path=False, markup=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root_logger.addHandler(handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return root_logger
