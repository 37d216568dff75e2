"""
Basic logging configuration for the application.

Configures the root logger with a console handler exactly once, so
repeated calls to ``create_app`` (tests, reloads) do not stack handlers.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO"), case insensitive
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
