"""Conftest for API unit tests."""

from collections.abc import Generator

import pytest
from loguru import logger

from src.core.logging import _state


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None]:
    """Keep create_app from adding its stdout sink."""
    logger.remove()
    _state.configured = True

    yield

    logger.remove()
