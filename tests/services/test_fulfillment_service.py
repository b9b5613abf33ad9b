"""
Tests for the fulfillment service.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from shopify_client.entities import CountOptions, Fulfillment, LineItem, ListOptions
from shopify_client.runtime.errors import InvalidArgumentError, ProtocolMismatchError, RequestFailedError
from shopify_client.services.fulfillments import FulfillmentService

from helpers import BASE_URL, json_response, mk_fulfillment

ORDER_ID = 450789469


@pytest.fixture
def fulfillments(engine):
    return FulfillmentService(engine)


class TestFulfillmentService:

    @pytest.mark.asyncio
    async def test_list(self, fulfillments, transport):
        transport.queue(json_response(200, {"fulfillments": [mk_fulfillment(1), mk_fulfillment(2)]}))

        result = await fulfillments.list(ORDER_ID, ListOptions(since_id=0)).to_list()

        assert [f.id for f in result] == [1, 2]
        assert result[0].line_items[0].price == Decimal("199.00")
        assert transport.calls[0].url == BASE_URL + f"orders/{ORDER_ID}/fulfillments.json"
        assert transport.calls[0].params == (("since_id", "0"),)

    @pytest.mark.asyncio
    async def test_list_page(self, fulfillments, transport):
        transport.queue(json_response(200, {"fulfillments": [mk_fulfillment(1)]}))

        page = await fulfillments.list_page(ORDER_ID)

        assert len(page) == 1
        assert not page.has_next

    @pytest.mark.asyncio
    async def test_count(self, fulfillments, transport):
        transport.queue(json_response(200, {"count": 2}))
        since = datetime(2024, 1, 1, tzinfo=timezone.utc)

        count = await fulfillments.count(ORDER_ID, CountOptions(created_at_min=since))

        assert count == 2
        assert transport.calls[0].url == BASE_URL + f"orders/{ORDER_ID}/fulfillments/count.json"
        assert transport.calls[0].params == (("created_at_min", "2024-01-01T00:00:00+00:00"),)

    @pytest.mark.asyncio
    async def test_get(self, fulfillments, transport):
        transport.queue(json_response(200, {"fulfillment": mk_fulfillment(255858046)}))

        fulfillment = await fulfillments.get(ORDER_ID, 255858046, fields="id,status")

        assert fulfillment.order_id == ORDER_ID
        assert fulfillment.status == "success"
        assert fulfillment.receipt == {"testcase": True, "authorization": "123456"}
        assert transport.calls[0].params == (("fields", "id,status"),)

    @pytest.mark.asyncio
    async def test_get_wrong_envelope(self, fulfillments, transport):
        transport.queue(json_response(200, {"order": {"id": ORDER_ID}}))

        with pytest.raises(ProtocolMismatchError):
            await fulfillments.get(ORDER_ID, 1)

    @pytest.mark.asyncio
    async def test_create(self, fulfillments, transport):
        transport.queue(json_response(201, {"fulfillment": mk_fulfillment(10, tracking_number="123")}))

        fulfillment = Fulfillment(
            location_id=905684977,
            tracking_number="123",
            line_items=[LineItem(id=466157049)],
        )
        created = await fulfillments.create(ORDER_ID, fulfillment, notify_customer=True)

        assert created.id == 10
        sent = transport.calls[0]
        assert sent.method == "POST"
        assert json.loads(sent.body) == {
            "fulfillment": {
                "location_id": 905684977,
                "tracking_number": "123",
                "line_items": [{"id": 466157049}],
                "notify_customer": True,
            }
        }

    @pytest.mark.asyncio
    async def test_create_validation_error(self, fulfillments, transport):
        transport.queue(json_response(422, {"errors": {"base": ["Line items are already fulfilled"]}}))

        with pytest.raises(RequestFailedError) as exc_info:
            await fulfillments.create(ORDER_ID, Fulfillment())

        assert exc_info.value.field_errors == {"base": ["Line items are already fulfilled"]}

    @pytest.mark.asyncio
    async def test_update(self, fulfillments, transport):
        transport.queue(json_response(200, {"fulfillment": mk_fulfillment(10, tracking_number="987")}))

        updated = await fulfillments.update(ORDER_ID, Fulfillment(id=10, tracking_number="987"))

        assert updated.tracking_number == "987"
        assert transport.calls[0].method == "PUT"
        assert transport.calls[0].url == BASE_URL + f"orders/{ORDER_ID}/fulfillments/10.json"

    @pytest.mark.asyncio
    async def test_update_requires_id(self, fulfillments, transport):
        with pytest.raises(InvalidArgumentError):
            await fulfillments.update(ORDER_ID, Fulfillment(tracking_number="987"))
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_order_id_required(self, fulfillments, transport):
        with pytest.raises(InvalidArgumentError):
            fulfillments.list(0)
        with pytest.raises(InvalidArgumentError):
            await fulfillments.count(None)
        assert transport.call_count == 0
