import sys
from typing import Iterator

import pytest
from loguru import logger

from flakeid import default
from tests.utils import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="TRACE")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def restore_logger() -> Iterator[None]:
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture(autouse=True)
def reset_default_generator() -> Iterator[None]:
    default.reset()
    yield
    default.reset()
