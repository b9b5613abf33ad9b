"""
Fulfillment resource.
"""

from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import Field, JsonValue

from .base import ShopifyObject
from .line_item import LineItem


class Fulfillment(ShopifyObject):
    """
    A fulfillment of some or all of an order's line items.

    The order is referenced by ``order_id`` only.
    """

    order_id: Optional[int] = None
    location_id: Optional[int] = None
    status: Optional[str] = Field(
        default=None,
        description="One of 'pending', 'open', 'success', 'cancelled', 'error' or 'failure'"
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    line_items: Optional[List[LineItem]] = None
    tracking_company: Optional[str] = None
    tracking_number: Optional[str] = Field(
        default=None, description="First of tracking_numbers when there are several"
    )
    tracking_numbers: Optional[List[str]] = None
    tracking_url: Optional[str] = Field(
        default=None, description="First of tracking_urls when there are several"
    )
    tracking_urls: Optional[List[str]] = None
    # Gateway-specific payload with no fixed schema; kept as raw JSON.
    receipt: Optional[JsonValue] = None
    notify_customer: Optional[bool] = Field(
        default=None, description="Whether the customer is emailed on create or update"
    )
