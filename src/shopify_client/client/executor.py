"""
The capability resource services depend on.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel

from .pagination import ListPage, PagedSequence
from .requests import HttpMethod, QueryInput, RequestDescriptor


@runtime_checkable
class RequestExecutor(Protocol):
    """Builds and executes requests; ``RequestEngine`` is the implementation."""

    def build(
        self,
        path: str,
        method: Union[str, HttpMethod] = HttpMethod.GET,
        envelope_key: Optional[str] = None,
        query: Optional[QueryInput] = None,
        body: Optional[Union[BaseModel, Mapping[str, Any]]] = None,
    ) -> RequestDescriptor:
        ...

    async def execute(self, descriptor: RequestDescriptor, target: Any = None) -> Any:
        ...

    async def execute_page(self, descriptor: RequestDescriptor, item_type: Any) -> ListPage:
        ...

    def execute_list(self, descriptor: RequestDescriptor, item_type: Any) -> PagedSequence:
        ...
