"""
Client configuration.

Holds the shop address, access token, API version and the retry/timeout knobs
shared by the transport and the request engine.
"""

from __future__ import annotations
import os
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from .runtime.errors import InvalidArgumentError

DEFAULT_API_VERSION = "2024-01"
SHOP_SUFFIX = ".myshopify.com"

_SHOP_NAME = re.compile(r"^[a-z0-9][a-z0-9-]*$")
_API_VERSION = re.compile(r"^(\d{4}-\d{2}|unstable)$")


def normalize_shop_domain(shop: str) -> str:
    """
    Turn ``my-shop``, ``my-shop.myshopify.com`` or ``https://my-shop.myshopify.com/admin``
    into ``my-shop.myshopify.com``.

    Raises:
        InvalidArgumentError: If the value cannot name a shop
    """
    if not shop or not shop.strip():
        raise InvalidArgumentError("Shop must not be empty")

    value = shop.strip().lower()
    if "://" in value:
        value = urlparse(value).hostname or ""
    value = value.split("/", 1)[0]

    if value.endswith(SHOP_SUFFIX):
        name = value[:-len(SHOP_SUFFIX)]
    else:
        name = value

    if not _SHOP_NAME.match(name):
        raise InvalidArgumentError(f"Invalid shop name: {shop!r}", details={"shop": shop})

    return name + SHOP_SUFFIX


@dataclass
class ClientConfig:
    """Configuration for the Shopify API client."""

    shop: str
    access_token: str
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_backoff: float = 2.0
    max_retry_delay: float = 60.0
    debug: bool = False
    user_agent: str = "shopify-rest-client-python/1.0.0"

    def __post_init__(self):
        self.shop_domain = normalize_shop_domain(self.shop)

        if not self.access_token:
            raise InvalidArgumentError("Access token must not be empty")
        if not _API_VERSION.match(self.api_version):
            raise InvalidArgumentError(
                f"Invalid API version: {self.api_version!r}; expected YYYY-MM or 'unstable'"
            )
        if self.timeout <= 0:
            raise InvalidArgumentError("Timeout must be positive")
        if self.max_retries < 0:
            raise InvalidArgumentError("max_retries must not be negative")

    @property
    def base_url(self) -> str:
        """Versioned Admin API root, always ending with a slash."""
        return f"https://{self.shop_domain}/admin/api/{self.api_version}/"

    @classmethod
    def from_env(cls, prefix: str = "SHOPIFY_", **overrides) -> ClientConfig:
        """
        Build a configuration from ``SHOPIFY_SHOP``, ``SHOPIFY_ACCESS_TOKEN``
        and (optionally) ``SHOPIFY_API_VERSION``.

        Keyword arguments override the environment.
        """
        values = {
            "shop": os.environ.get(f"{prefix}SHOP", ""),
            "access_token": os.environ.get(f"{prefix}ACCESS_TOKEN", ""),
        }
        api_version: Optional[str] = os.environ.get(f"{prefix}API_VERSION")
        if api_version:
            values["api_version"] = api_version
        values.update(overrides)
        return cls(**values)

    def __repr__(self) -> str:
        return (
            f"ClientConfig(shop={self.shop_domain!r}, api_version={self.api_version!r}, "
            f"access_token='***', timeout={self.timeout}, max_retries={self.max_retries})"
        )
