"""Logging setup for the idtool command line."""

import logging

_LOGGER_NAME = "idtool"


def configure_logging(verbose: bool = False, level: str = "WARNING") -> logging.Logger:
    """Attach a stderr handler to the idtool logger hierarchy.

    Args:
        verbose: Force DEBUG level regardless of `level`
        level: Level name from configuration (e.g. "INFO")

    Returns:
        The configured `idtool` logger
    """
    resolved = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # Drop handlers left by earlier invocations in this process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("[idtool] %(levelname)s %(message)s"))
    logger.addHandler(handler)

    return logger
