"""
Typed Admin API resources.
"""

from .base import ShopifyObject
from .line_item import LineItem
from .fulfillment import Fulfillment
from .theme import Theme
from .options import CountOptions, ListOptions

__all__ = [
    "ShopifyObject",
    "LineItem",
    "Fulfillment",
    "Theme",
    "CountOptions",
    "ListOptions",
]
