"""
Shared fixtures: a test shop configuration, a scripted transport and an
engine whose retry sleeps are recorded instead of awaited.
"""
import sys
import pathlib

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from shopify_client.client.engine import RequestEngine
from shopify_client.config import ClientConfig

from helpers import MockTransport


@pytest.fixture
def config():
    """Configuration for a fake shop with fast, bounded retries."""
    return ClientConfig(
        shop="test-shop",
        access_token="shpat_test_token",
        api_version="2024-01",
        max_retries=3,
        retry_delay=0.5,
        retry_backoff=2.0,
    )


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def sleeps():
    """Delays requested by the engine, in order."""
    return []


@pytest.fixture
def engine(config, transport, sleeps):
    async def record_sleep(delay):
        sleeps.append(delay)

    return RequestEngine(config, transport, sleep=record_sleep)
