"""
HTTP transports for the Shopify client.
"""

from .base import Transport, TransportResponse
from .http import AiohttpTransport, PoolConfig

__all__ = ["Transport", "TransportResponse", "AiohttpTransport", "PoolConfig"]
