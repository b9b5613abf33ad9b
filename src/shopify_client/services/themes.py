"""
Theme service.
"""

from __future__ import annotations
from typing import List, Optional, Union

from ..client.pagination import ListPage, PagedSequence
from ..client.requests import HttpMethod
from ..entities.options import ListOptions
from ..entities.theme import Theme
from ..runtime.codec import to_payload
from .base import ResourceService, fields_param, require_id


class ThemeService(ResourceService):
    """
    Reads and manages a shop's themes.

    Example:
        ```python
        themes = await client.themes.list().to_list()
        theme = await client.themes.get(828155753)
        theme.name = "Spring"
        await client.themes.update(theme)
        ```
    """

    def _list_request(self, options: Optional[ListOptions]):
        query = options.to_params() if options is not None else None
        return self._executor.build("themes.json", HttpMethod.GET, "themes", query)

    def list(self, options: Optional[ListOptions] = None) -> PagedSequence[Theme]:
        """Lazy sequence over the shop's themes."""
        return self._executor.execute_list(self._list_request(options), Theme)

    async def list_page(self, options: Optional[ListOptions] = None) -> ListPage[Theme]:
        """A single page of themes with its cursors."""
        return await self._executor.execute_page(self._list_request(options), Theme)

    async def get(self, theme_id: int, fields: Optional[Union[str, List[str]]] = None) -> Theme:
        """
        Retrieve a theme.

        Args:
            theme_id: Theme id
            fields: Fields to return, as a list or comma-separated string
        """
        require_id(theme_id, "theme_id")
        request = self._executor.build(
            f"themes/{theme_id}.json", HttpMethod.GET, "theme", fields_param(fields)
        )
        return await self._executor.execute(request, Theme)

    async def create(self, theme: Theme, source_url: Optional[str] = None) -> Theme:
        """
        Create a theme.

        Args:
            theme: Theme to create
            source_url: URL of a .zip archive with the theme's files

        Returns:
            The created theme, initially ``unpublished``
        """
        body = to_payload(theme)
        if source_url:
            body["src"] = source_url
        request = self._executor.build("themes.json", HttpMethod.POST, "theme", body=body)
        return await self._executor.execute(request, Theme)

    async def update(self, theme: Theme) -> Theme:
        """Update a theme; ``theme.id`` must be set."""
        theme_id = require_id(theme.id, "theme.id")
        request = self._executor.build(f"themes/{theme_id}.json", HttpMethod.PUT, "theme", body=theme)
        return await self._executor.execute(request, Theme)

    async def delete(self, theme_id: int) -> None:
        """Delete a theme."""
        require_id(theme_id, "theme_id")
        request = self._executor.build(f"themes/{theme_id}.json", HttpMethod.DELETE)
        await self._executor.execute(request)
