"""
Per-resource services.
"""

from .base import ResourceService
from .themes import ThemeService
from .fulfillments import FulfillmentService

__all__ = ["ResourceService", "ThemeService", "FulfillmentService"]
