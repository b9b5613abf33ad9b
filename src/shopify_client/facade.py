"""
Shopify Client Facade.

Provides the primary entry point: one object per shop that wires the
configuration, the aiohttp transport, the request engine and the resource
services together.

Example:
    ```python
    from shopify_client import ShopifyClient

    async with ShopifyClient("my-shop", "shpat_...") as client:
        async for theme in client.themes.list():
            print(theme.id, theme.name, theme.role)

        fulfillment = await client.fulfillments.get(order_id=450789469, fulfillment_id=255858046)
    ```
"""

from __future__ import annotations
import logging
from typing import Optional

from .client.engine import RequestEngine
from .config import ClientConfig
from .recovery.retry import RetryPolicy
from .services.fulfillments import FulfillmentService
from .services.themes import ThemeService
from .transport.base import Transport
from .transport.http import AiohttpTransport, PoolConfig

PACKAGE_LOGGER = "shopify_client"


class ShopifyClient:
    """
    Shopify Admin REST API client for one shop.

    Attributes:
        config: Client configuration
        engine: Request engine shared by every service
        themes: ThemeService
        fulfillments: FulfillmentService
    """

    def __init__(
        self,
        shop: Optional[str] = None,
        access_token: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        retry_policy: Optional[RetryPolicy] = None,
        **options,
    ):
        """
        Initialize the client.

        Args:
            shop: Shop name, ``*.myshopify.com`` domain or shop URL
            access_token: Admin API access token
            config: Complete configuration; replaces ``shop``, ``access_token``
                and ``options``
            transport: Transport to use; an ``AiohttpTransport`` by default
            retry_policy: Retry policy; derived from the configuration by default
            **options: Extra ``ClientConfig`` fields (api_version, timeout...)
        """
        if config is None:
            config = ClientConfig(shop=shop or "", access_token=access_token or "", **options)
        self.config = config

        self.logger = logging.getLogger(PACKAGE_LOGGER)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

        self.transport = transport or AiohttpTransport(PoolConfig(request_timeout=config.timeout))
        self.engine = RequestEngine(config, self.transport, retry_policy)

        self.themes = ThemeService(self.engine)
        self.fulfillments = FulfillmentService(self.engine)

    @classmethod
    def from_env(cls, **options) -> ShopifyClient:
        """Create a client from ``SHOPIFY_*`` environment variables."""
        return cls(config=ClientConfig.from_env(**options))

    async def close(self) -> None:
        """Close the transport and its pooled connections."""
        await self.transport.close()

    async def __aenter__(self) -> ShopifyClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"ShopifyClient(shop={self.config.shop_domain!r}, api_version={self.config.api_version!r})"
