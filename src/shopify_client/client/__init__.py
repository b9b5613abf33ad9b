"""
Request/response engine for the Shopify client.
"""

from .requests import HttpMethod, RequestDescriptor, RequestBuilder
from .pagination import PageCursor, CallLimit, ListPage, PagedSequence
from .engine import RequestEngine
from .executor import RequestExecutor

__all__ = [
    "HttpMethod",
    "RequestDescriptor",
    "RequestBuilder",
    "PageCursor",
    "CallLimit",
    "ListPage",
    "PagedSequence",
    "RequestEngine",
    "RequestExecutor",
]
