"""
Shopify Python Client

Typed, asynchronous client for the Shopify Admin REST API: pydantic entities,
per-resource services and a shared request engine handling envelopes,
cursor pagination, rate-limit retries and typed errors.
"""

from .config import ClientConfig
from .facade import ShopifyClient

from .client import (
    HttpMethod, RequestDescriptor, RequestBuilder,
    PageCursor, CallLimit, ListPage, PagedSequence,
    RequestEngine, RequestExecutor,
)
from .entities import (
    ShopifyObject, LineItem, Fulfillment, Theme, CountOptions, ListOptions,
)
from .services import ResourceService, ThemeService, FulfillmentService
from .transport import Transport, TransportResponse, AiohttpTransport, PoolConfig
from .recovery import RetryPolicy, ExponentialBackoff, FixedBackoff
from .runtime.errors import *

__version__ = "1.0.0"
__all__ = [
    "ShopifyClient",
    "ClientConfig",

    # Engine
    "HttpMethod",
    "RequestDescriptor",
    "RequestBuilder",
    "PageCursor",
    "CallLimit",
    "ListPage",
    "PagedSequence",
    "RequestEngine",
    "RequestExecutor",

    # Entities
    "ShopifyObject",
    "LineItem",
    "Fulfillment",
    "Theme",
    "CountOptions",
    "ListOptions",

    # Services
    "ResourceService",
    "ThemeService",
    "FulfillmentService",

    # Transport
    "Transport",
    "TransportResponse",
    "AiohttpTransport",
    "PoolConfig",

    # Retry
    "RetryPolicy",
    "ExponentialBackoff",
    "FixedBackoff",

    # Errors
    "ErrorCode",
    "ShopifyError",
    "InvalidArgumentError",
    "ProtocolMismatchError",
    "TransportError",
    "ConnectionFailedError",
    "RequestTimeoutError",
    "RequestFailedError",
    "RateLimitedError",
    "error_from_response",
    "ErrorHandler",
]
