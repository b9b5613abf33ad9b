"""
Line item records embedded in orders and fulfillments.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Optional

from .base import ShopifyObject


class LineItem(ShopifyObject):
    """A line item. ``variant_id`` and ``product_id`` are foreign ids."""

    variant_id: Optional[int] = None
    product_id: Optional[int] = None
    title: Optional[str] = None
    variant_title: Optional[str] = None
    name: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[Decimal] = None
    sku: Optional[str] = None
    vendor: Optional[str] = None
    grams: Optional[int] = None
    requires_shipping: Optional[bool] = None
    taxable: Optional[bool] = None
    gift_card: Optional[bool] = None
    fulfillable_quantity: Optional[int] = None
    fulfillment_service: Optional[str] = None
    fulfillment_status: Optional[str] = None
