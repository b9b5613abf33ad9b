"""
Theme resource.
"""

from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import ShopifyObject


class Theme(ShopifyObject):
    """
    A shop theme.

    A new theme always starts out ``unpublished``; any other requested role is
    applied by the platform once the theme's files have been extracted.
    """

    name: Optional[str] = Field(default=None, description="Name of the theme")
    role: Optional[str] = Field(
        default=None,
        description="One of 'main', 'unpublished', 'demo' or 'development'"
    )
    theme_store_id: Optional[int] = Field(
        default=None, description="Theme Store id, when the theme came from the Theme Store"
    )
    previewable: Optional[bool] = Field(default=None, description="Whether the theme can be previewed")
    processing: Optional[bool] = Field(default=None, description="Whether files are still being copied")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
