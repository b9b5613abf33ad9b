"""
Cursor-based pagination support.

List endpoints return one page at a time and advertise the neighbouring pages
in a ``Link`` header::

    Link: <https://shop.myshopify.com/admin/api/2024-01/themes.json?limit=50&page_info=abc>; rel="next"

This module parses those links into page cursors and exposes a lazy,
re-fetching async sequence over all pages.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING, Any, AsyncIterator, Dict, Generic, List, Optional, Tuple, TypeVar,
)
from urllib.parse import parse_qsl, urlparse

from ..runtime.errors import ProtocolMismatchError

if TYPE_CHECKING:
    from .requests import RequestDescriptor

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LINK = re.compile(r'<([^>]*)>\s*((?:;\s*[^;,]+)*)')
_REL = re.compile(r'rel\s*=\s*"?([^";]+)"?')


@dataclass(frozen=True)
class PageCursor:
    """Opaque cursor pointing at another page of a list."""
    page_info: str
    params: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_url(cls, url: str) -> Optional[PageCursor]:
        """Extract the cursor from a link URL; None if it has no ``page_info``."""
        params = tuple(parse_qsl(urlparse(url).query, keep_blank_values=True))
        page_info = next((value for key, value in params if key == "page_info"), None)
        if not page_info:
            return None
        return cls(page_info=page_info, params=params)

    def to_query(self) -> Tuple[Tuple[str, str], ...]:
        """Query that fetches the page this cursor points at."""
        if any(key == "page_info" for key, _ in self.params):
            return self.params
        return (("page_info", self.page_info),) + self.params


def parse_link_header(value: Optional[str]) -> Dict[str, str]:
    """
    Parse an RFC 8288 ``Link`` header into a ``{rel: url}`` mapping.

    Args:
        value: Raw header value

    Returns:
        Mapping of relation name (``next``, ``previous``) to URL
    """
    links: Dict[str, str] = {}
    if not value:
        return links
    for url, attributes in _LINK.findall(value):
        match = _REL.search(attributes)
        if not match:
            continue
        for rel in match.group(1).split():
            links.setdefault(rel.lower(), url.strip())
    return links


def cursors_from_link(value: Optional[str]) -> Tuple[Optional[PageCursor], Optional[PageCursor]]:
    """Return the ``(next, previous)`` cursors advertised by a ``Link`` header."""
    links = parse_link_header(value)
    next_url = links.get("next")
    previous_url = links.get("previous") or links.get("prev")
    return (
        PageCursor.from_url(next_url) if next_url else None,
        PageCursor.from_url(previous_url) if previous_url else None,
    )


@dataclass
class CallLimit:
    """Bucket usage reported by ``X-Shopify-Shop-Api-Call-Limit`` (e.g. ``32/40``)."""
    used: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(self.limit - self.used, 0)

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[CallLimit]:
        if not value:
            return None
        used, _, limit = value.partition("/")
        try:
            return cls(used=int(used), limit=int(limit))
        except ValueError:
            return None


@dataclass
class ListPage(Generic[T]):
    """One decoded page of a list endpoint."""
    items: List[T] = field(default_factory=list)
    next_cursor: Optional[PageCursor] = None
    previous_cursor: Optional[PageCursor] = None
    call_limit: Optional[CallLimit] = None

    @property
    def has_next(self) -> bool:
        return self.next_cursor is not None

    @property
    def has_previous(self) -> bool:
        return self.previous_cursor is not None

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class PagedSequence(Generic[T]):
    """
    Lazy sequence over every page of a list endpoint.

    Pages are fetched one at a time, only when the consumer has used up the
    items already received. The sequence ends when a page carries no next
    cursor. Nothing is cached: iterating again issues the HTTP calls again.

    Example:
        ```python
        async for theme in client.themes.list():
            print(theme.name)

        themes = await client.themes.list().to_list()
        ```
    """

    def __init__(self, engine: Any, descriptor: RequestDescriptor, item_type: Any):
        self._engine = engine
        self._descriptor = descriptor
        self._item_type = item_type

    @property
    def descriptor(self) -> RequestDescriptor:
        return self._descriptor

    async def pages(self) -> AsyncIterator[ListPage[T]]:
        """
        Iterate over pages, following next cursors.

        Raises:
            ProtocolMismatchError: If a next cursor points at a page already fetched
        """
        descriptor = self._descriptor
        seen = {value for name, value in descriptor.query if name == "page_info"}
        while True:
            page = await self._engine.execute_page(descriptor, self._item_type)
            yield page
            cursor = page.next_cursor
            if cursor is None:
                return
            if cursor.page_info in seen:
                raise ProtocolMismatchError(
                    "Pagination did not advance: next cursor points at a page already fetched",
                    details={"path": descriptor.path, "page_info": cursor.page_info},
                )
            seen.add(cursor.page_info)
            logger.debug(f"Following next page of {descriptor.path}: page_info={cursor.page_info}")
            descriptor = descriptor.with_query(cursor.to_query())

    async def _items(self) -> AsyncIterator[T]:
        pages = self.pages()
        try:
            async for page in pages:
                for item in page.items:
                    yield item
        finally:
            await pages.aclose()

    def __aiter__(self) -> AsyncIterator[T]:
        return self._items()

    async def to_list(self) -> List[T]:
        """Fetch every page and return all items in server order."""
        return [item async for item in self]

    async def first(self) -> Optional[T]:
        """First item, or None; stops fetching once an item is found."""
        items = self._items()
        try:
            async for item in items:
                return item
        finally:
            await items.aclose()
        return None


__all__ = [
    "PageCursor",
    "CallLimit",
    "ListPage",
    "PagedSequence",
    "parse_link_header",
    "cursors_from_link",
]
