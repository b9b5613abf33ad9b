"""
Error recovery components for the Shopify client.

Provides the bounded retry policies the request engine applies to
rate-limited responses and transient transport failures.
"""

from .retry import RetryPolicy, ExponentialBackoff, FixedBackoff, parse_retry_after

__all__ = [
    "RetryPolicy",
    "ExponentialBackoff",
    "FixedBackoff",
    "parse_retry_after",
]
