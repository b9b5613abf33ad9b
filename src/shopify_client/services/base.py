"""
Shared helpers for resource services.
"""

from __future__ import annotations
from typing import Any, List, Optional, Tuple, Union

from ..client.executor import RequestExecutor
from ..runtime.errors import InvalidArgumentError


def require_id(value: Any, name: str = "id") -> int:
    """
    Validate a resource id.

    Raises:
        InvalidArgumentError: If the id is missing or not a positive integer
    """
    if value is None:
        raise InvalidArgumentError(f"{name} is required")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return value


def fields_param(fields: Optional[Union[str, List[str]]]) -> List[Tuple[str, Any]]:
    """``fields`` query parameter, or nothing when no fields are requested."""
    if not fields:
        return []
    return [("fields", fields)]


class ResourceService:
    """
    Base for per-resource services.

    Holds the request executor it delegates to; owns no connection.
    """

    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    @property
    def executor(self) -> RequestExecutor:
        return self._executor
