import logging

import pytest

from makit.utils.logging import PathContext


@pytest.fixture(autouse=True)
def reset_makit_logger():
    yield
    logger = logging.getLogger("makit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    PathContext.current = None
