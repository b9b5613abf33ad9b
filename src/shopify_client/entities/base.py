"""
Base class for Admin API resources.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ShopifyObject(BaseModel):
    """
    A resource with a numeric id.

    Field names match the API's snake_case JSON names. Unknown fields sent by
    newer API versions are ignored rather than kept as dynamic attributes.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    admin_graphql_api_id: Optional[str] = None
