from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from object_mapper.constants import LOGGER_NAME
from object_mapper.core.registry import get_registry

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolated_registry() -> Iterator[None]:
    get_registry().reset()
    yield
    get_registry().reset()


@pytest.fixture(autouse=True)
def _restore_logger_level() -> Iterator[None]:
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    yield
    logger.setLevel(level)
