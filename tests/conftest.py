"""Shared pytest fixtures."""

import logging

import pytest

from primekit.utils.log import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_primekit_logger():
    """Detach handlers the CLI attaches so they do not leak between tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
