import logging

import pytest


@pytest.fixture(autouse=True)
def reset_idtool_logger():
    """Drop handlers the CLI attaches so they don't outlive CliRunner's streams."""
    yield
    logger = logging.getLogger("idtool")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
