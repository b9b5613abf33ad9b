"""
Fulfillment service.

Fulfillments live under their order: ``orders/<order_id>/fulfillments.json``.
"""

from __future__ import annotations
from typing import List, Optional, Union

from ..client.pagination import ListPage, PagedSequence
from ..client.requests import HttpMethod
from ..entities.fulfillment import Fulfillment
from ..entities.options import CountOptions, ListOptions
from ..runtime.codec import to_payload
from .base import ResourceService, fields_param, require_id


class FulfillmentService(ResourceService):
    """Reads and manages the fulfillments of an order."""

    def _list_request(self, order_id: int, options: Optional[ListOptions]):
        require_id(order_id, "order_id")
        query = options.to_params() if options is not None else None
        return self._executor.build(
            f"orders/{order_id}/fulfillments.json", HttpMethod.GET, "fulfillments", query
        )

    def list(self, order_id: int, options: Optional[ListOptions] = None) -> PagedSequence[Fulfillment]:
        """Lazy sequence over an order's fulfillments."""
        return self._executor.execute_list(self._list_request(order_id, options), Fulfillment)

    async def list_page(self, order_id: int, options: Optional[ListOptions] = None) -> ListPage[Fulfillment]:
        """A single page of an order's fulfillments with its cursors."""
        return await self._executor.execute_page(self._list_request(order_id, options), Fulfillment)

    async def count(self, order_id: int, options: Optional[CountOptions] = None) -> int:
        """Number of fulfillments on an order."""
        require_id(order_id, "order_id")
        query = options.to_params() if options is not None else None
        request = self._executor.build(
            f"orders/{order_id}/fulfillments/count.json", HttpMethod.GET, "count", query
        )
        return await self._executor.execute(request, int)

    async def get(self, order_id: int, fulfillment_id: int,
                  fields: Optional[Union[str, List[str]]] = None) -> Fulfillment:
        """Retrieve one fulfillment of an order."""
        require_id(order_id, "order_id")
        require_id(fulfillment_id, "fulfillment_id")
        request = self._executor.build(
            f"orders/{order_id}/fulfillments/{fulfillment_id}.json",
            HttpMethod.GET,
            "fulfillment",
            fields_param(fields),
        )
        return await self._executor.execute(request, Fulfillment)

    async def create(self, order_id: int, fulfillment: Fulfillment,
                     notify_customer: Optional[bool] = None) -> Fulfillment:
        """
        Create a fulfillment for an order.

        Args:
            order_id: Order to fulfill
            fulfillment: Fulfillment to create; no ``line_items`` fulfills every line item
            notify_customer: Whether the customer should be emailed

        Returns:
            The created fulfillment
        """
        require_id(order_id, "order_id")
        body = to_payload(fulfillment)
        if notify_customer is not None:
            body["notify_customer"] = notify_customer
        request = self._executor.build(
            f"orders/{order_id}/fulfillments.json", HttpMethod.POST, "fulfillment", body=body
        )
        return await self._executor.execute(request, Fulfillment)

    async def update(self, order_id: int, fulfillment: Fulfillment) -> Fulfillment:
        """Update a fulfillment; ``fulfillment.id`` must be set."""
        require_id(order_id, "order_id")
        fulfillment_id = require_id(fulfillment.id, "fulfillment.id")
        request = self._executor.build(
            f"orders/{order_id}/fulfillments/{fulfillment_id}.json",
            HttpMethod.PUT,
            "fulfillment",
            body=fulfillment,
        )
        return await self._executor.execute(request, Fulfillment)
