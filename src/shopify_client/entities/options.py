"""
Filter and paging options for list and count endpoints.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class CountOptions(BaseModel):
    """Date filters shared by count and list endpoints."""

    created_at_min: Optional[datetime] = Field(default=None, description="Created at or after")
    created_at_max: Optional[datetime] = Field(default=None, description="Created at or before")
    updated_at_min: Optional[datetime] = Field(default=None, description="Updated at or after")
    updated_at_max: Optional[datetime] = Field(default=None, description="Updated at or before")

    model_config = {"populate_by_name": True}

    def to_params(self) -> List[Tuple[str, Any]]:
        """Convert to ordered query parameters, skipping unset options."""
        return [(name, value) for name, value in self.model_dump().items() if value is not None]


class ListOptions(CountOptions):
    """
    Options for list endpoints.

    ``page_info`` resumes from a cursor returned by an earlier page; the
    platform then ignores every filter except ``limit`` and ``fields``.
    """

    limit: Optional[int] = Field(default=None, ge=1, le=250, description="Results per page")
    since_id: Optional[int] = Field(default=None, ge=0, description="Only results after this id")
    fields: Optional[List[str]] = Field(default=None, description="Fields to include")
    page_info: Optional[str] = Field(default=None, description="Cursor of the page to fetch")

    @field_validator("fields", mode="before")
    @classmethod
    def split_fields(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    def to_params(self) -> List[Tuple[str, Any]]:
        if self.page_info is not None:
            params: List[Tuple[str, Any]] = [("page_info", self.page_info)]
            if self.limit is not None:
                params.append(("limit", self.limit))
            if self.fields:
                params.append(("fields", self.fields))
            return params
        return super().to_params()
