"""
Unit tests for the ShopifyClient facade.

Tests configuration handling, wiring of the engine and services, and
transport ownership.
"""

import logging

import pytest

from shopify_client import ShopifyClient
from shopify_client.config import ClientConfig
from shopify_client.recovery.retry import FixedBackoff
from shopify_client.runtime.errors import InvalidArgumentError
from shopify_client.services.fulfillments import FulfillmentService
from shopify_client.services.themes import ThemeService
from shopify_client.transport.http import AiohttpTransport

from helpers import BASE_URL, MockTransport, json_response, mk_theme


@pytest.fixture
def package_logger():
    logger = logging.getLogger("shopify_client")
    level = logger.level
    yield logger
    logger.setLevel(level)


class TestShopifyClientInitialization:
    """Tests for facade initialization."""

    def test_basic_initialization(self):
        client = ShopifyClient("test-shop", "shpat_test_token")

        assert client.config.shop_domain == "test-shop.myshopify.com"
        assert isinstance(client.transport, AiohttpTransport)
        assert isinstance(client.themes, ThemeService)
        assert isinstance(client.fulfillments, FulfillmentService)
        assert client.themes.executor is client.engine
        assert client.fulfillments.executor is client.engine

    def test_options_reach_config(self):
        client = ShopifyClient("test-shop", "t", api_version="2023-10", timeout=5.0, max_retries=1)

        assert client.config.api_version == "2023-10"
        assert client.transport.config.request_timeout == 5.0
        assert client.engine.retry_policy.max_attempts == 2

    def test_explicit_config(self, config):
        client = ShopifyClient(config=config, transport=MockTransport())
        assert client.config is config

    def test_custom_retry_policy(self, config):
        policy = FixedBackoff(max_attempts=2)
        client = ShopifyClient(config=config, transport=MockTransport(), retry_policy=policy)
        assert client.engine.retry_policy is policy

    def test_missing_credentials(self):
        with pytest.raises(InvalidArgumentError):
            ShopifyClient()
        with pytest.raises(InvalidArgumentError):
            ShopifyClient("test-shop")

    def test_debug_enables_debug_logging(self, package_logger):
        ShopifyClient("test-shop", "t", debug=True, transport=MockTransport())
        assert package_logger.level == logging.DEBUG

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SHOPIFY_SHOP", "env-shop")
        monkeypatch.setenv("SHOPIFY_ACCESS_TOKEN", "shpat_env")

        client = ShopifyClient.from_env(timeout=10.0)

        assert client.config.shop_domain == "env-shop.myshopify.com"
        assert client.config.timeout == 10.0

    def test_repr_hides_token(self):
        client = ShopifyClient("test-shop", "shpat_secret", transport=MockTransport())
        assert "test-shop.myshopify.com" in repr(client)
        assert "shpat_secret" not in repr(client)


class TestShopifyClientUsage:

    @pytest.mark.asyncio
    async def test_request_through_services(self, config):
        transport = MockTransport(json_response(200, {"theme": mk_theme(5)}))
        client = ShopifyClient(config=config, transport=transport)

        theme = await client.themes.get(5)

        assert theme.id == 5
        sent = transport.calls[0]
        assert sent.url == BASE_URL + "themes/5.json"
        assert sent.headers["X-Shopify-Access-Token"] == "shpat_test_token"
        assert sent.timeout == config.timeout

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, config):
        transport = MockTransport()
        async with ShopifyClient(config=config, transport=transport) as client:
            assert isinstance(client, ShopifyClient)
        assert transport.closed is True
