"""Logging setup shared by the web app and the operator CLI."""

import logging

LOGGER_NAME = "inkcraft"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Give the ``inkcraft`` logger one stream handler and the requested level.

    Calling it again only changes the level, so building several apps in one
    process never duplicates output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
