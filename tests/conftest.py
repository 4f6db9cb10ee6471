import logging

import pytest


@pytest.fixture(autouse=True)
def reset_formslice_logger():
    """Undo handler/propagation changes made by Logger(...) during a test."""
    yield
    logger = logging.getLogger("formslice")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
