"""Logging setup for the server entry point."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = "INFO") -> None:
    """Configure root logging with a single stream handler."""
    if isinstance(level, str):
        level = level.upper()
    logging.root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler])
