import logging

import pytest

from shroud import SecretClient, generate_key
from shroud.core.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; tests that patch the environment need a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def key() -> bytes:
    return generate_key()


@pytest.fixture
def client(key) -> SecretClient:
    return SecretClient(key)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
