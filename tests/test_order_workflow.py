"""
Tests for the order creation workflow
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.schemas.order import OrderItemRequest, OrderStatus
from shared.utils.errors import InvalidRequest
from shared.utils.service_client import ServiceClientError
from shared.utils.store import InMemoryRecordStore
from orders_service.services.order_store import OrderStore
from orders_service.services.order_workflow import OrderWorkflow
from orders_service.services.pricing import Defaulted, Resolved

DEFAULT_PRICE = 10.99


def make_catalog(prices):
    """Catalog mock: known ids return their price, others fail like a 404"""
    catalog = MagicMock()

    async def get_book_price(book_id):
        if book_id in prices:
            return prices[book_id]
        raise ServiceClientError("books-service", f"/api/books/{book_id} returned 404", status_code=404)

    catalog.get_book_price = AsyncMock(side_effect=get_book_price)
    return catalog


def make_identity(available=True):
    identity = MagicMock()
    if available:
        identity.get_user = AsyncMock(return_value={"id": "u1", "name": "John Doe"})
    else:
        identity.get_user = AsyncMock(side_effect=ServiceClientError("users-service", "timed out calling /api/users/u1"))
    return identity


@pytest.fixture
def store():
    return OrderStore(InMemoryRecordStore())


def make_workflow(store, catalog, identity):
    return OrderWorkflow(store, catalog, identity, DEFAULT_PRICE)


class TestOrderCreation:

    @pytest.mark.asyncio
    async def test_example_order(self, store):
        workflow = make_workflow(store, make_catalog({"b1": 12.99}), make_identity())

        order = await workflow.create("u1", [{"bookId": "b1", "quantity": 2}])

        assert order.user_id == "u1"
        assert len(order.items) == 1
        assert order.items[0].book_id == "b1"
        assert order.items[0].quantity == 2
        assert order.items[0].price == 12.99
        assert order.total_amount == 25.98
        assert order.status == OrderStatus.PENDING
        assert order.created_at

    @pytest.mark.asyncio
    async def test_total_is_rounded_sum_of_catalog_prices(self, store):
        prices = {"b1": 12.99, "b2": 14.99, "b3": 45.99}
        workflow = make_workflow(store, make_catalog(prices), make_identity())

        order = await workflow.create("u1", [
            {"bookId": "b1", "quantity": 2},
            {"bookId": "b2", "quantity": 1},
            {"bookId": "b3", "quantity": 3},
        ])

        assert order.total_amount == round(12.99 * 2 + 14.99 + 45.99 * 3, 2)
        assert order.total_amount == 178.94

    @pytest.mark.asyncio
    async def test_order_is_stored(self, store):
        workflow = make_workflow(store, make_catalog({"b1": 12.99}), make_identity())

        order = await workflow.create("u1", [{"bookId": "b1", "quantity": 1}])

        assert await store.get_by_id(order.id) == order

    @pytest.mark.asyncio
    async def test_accepts_request_models(self, store):
        workflow = make_workflow(store, make_catalog({"b1": 12.99}), make_identity())

        order = await workflow.create("u1", [OrderItemRequest(book_id="b1", quantity=1)])

        assert order.total_amount == 12.99

    @pytest.mark.asyncio
    async def test_numeric_book_id_is_looked_up_as_string(self, store):
        catalog = make_catalog({"7": 20.0})
        workflow = make_workflow(store, catalog, make_identity())

        order = await workflow.create("u1", [{"bookId": 7, "quantity": 2}])

        catalog.get_book_price.assert_awaited_once_with("7")
        assert order.items[0].book_id == "7"
        assert order.total_amount == 40.0

    @pytest.mark.asyncio
    async def test_catalog_failure_uses_default_price(self, store):
        workflow = make_workflow(store, make_catalog({"b1": 12.99}), make_identity())

        placement = await workflow.place_order("u1", [
            {"bookId": "b1", "quantity": 1},
            {"bookId": "missing", "quantity": 2},
        ])

        order = placement.order
        assert order.items[1].price == DEFAULT_PRICE
        assert order.total_amount == round(12.99 + DEFAULT_PRICE * 2, 2)
        assert isinstance(placement.pricing[0], Resolved)
        assert isinstance(placement.pricing[1], Defaulted)
        assert placement.defaulted_count == 1
        assert placement.fully_priced is False

    @pytest.mark.asyncio
    async def test_catalog_completely_down_still_creates_order(self, store):
        workflow = make_workflow(store, make_catalog({}), make_identity())

        order = await workflow.create("u1", [{"bookId": "b1", "quantity": 3}])

        assert order.items[0].price == DEFAULT_PRICE
        assert order.total_amount == 32.97
        assert order.status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_identity_failure_does_not_change_outcome(self, store):
        items = [{"bookId": "b1", "quantity": 2}, {"bookId": "b2", "quantity": 1}]
        prices = {"b1": 12.99, "b2": 14.99}

        with_identity = await make_workflow(store, make_catalog(prices), make_identity(True)).place_order("u1", items)
        without_identity = await make_workflow(store, make_catalog(prices), make_identity(False)).place_order("u1", items)

        assert with_identity.user_verified is True
        assert without_identity.user_verified is False
        assert without_identity.order.items == with_identity.order.items
        assert without_identity.order.total_amount == with_identity.order.total_amount
        assert without_identity.order.status == with_identity.order.status

    @pytest.mark.asyncio
    async def test_identity_is_checked_once(self, store):
        identity = make_identity()
        workflow = make_workflow(store, make_catalog({"b1": 12.99}), identity)

        await workflow.create("u1", [{"bookId": "b1", "quantity": 1}, {"bookId": "b1", "quantity": 1}])

        identity.get_user.assert_awaited_once_with("u1")

    @pytest.mark.asyncio
    async def test_no_retries_on_catalog_failure(self, store):
        catalog = make_catalog({})
        workflow = make_workflow(store, catalog, make_identity())

        await workflow.create("u1", [{"bookId": "b1", "quantity": 1}])

        assert catalog.get_book_price.await_count == 1

    @pytest.mark.asyncio
    async def test_line_order_matches_input_despite_completion_order(self, store):
        delays = {"slow": 0.05, "medium": 0.02, "fast": 0.0}
        prices = {"slow": 1.0, "medium": 2.0, "fast": 3.0}
        completed = []

        async def get_book_price(book_id):
            await asyncio.sleep(delays[book_id])
            completed.append(book_id)
            return prices[book_id]

        catalog = MagicMock()
        catalog.get_book_price = AsyncMock(side_effect=get_book_price)
        workflow = make_workflow(store, catalog, make_identity())

        order = await workflow.create("u1", [
            {"bookId": "slow", "quantity": 1},
            {"bookId": "medium", "quantity": 1},
            {"bookId": "fast", "quantity": 1},
        ])

        assert completed == ["fast", "medium", "slow"]
        assert [line.book_id for line in order.items] == ["slow", "medium", "fast"]
        assert [line.price for line in order.items] == [1.0, 2.0, 3.0]

    @pytest.mark.asyncio
    async def test_lookups_run_concurrently(self, store):
        async def get_book_price(book_id):
            await asyncio.sleep(0.1)
            return 5.0

        catalog = MagicMock()
        catalog.get_book_price = AsyncMock(side_effect=get_book_price)
        workflow = make_workflow(store, catalog, make_identity())

        loop = asyncio.get_running_loop()
        started = loop.time()
        await workflow.create("u1", [{"bookId": f"b{i}", "quantity": 1} for i in range(10)])

        assert loop.time() - started < 0.5

    @pytest.mark.asyncio
    async def test_line_prices_are_snapshots(self, store):
        prices = {"b1": 12.99}
        workflow = make_workflow(store, make_catalog(prices), make_identity())
        order = await workflow.create("u1", [{"bookId": "b1", "quantity": 1}])

        prices["b1"] = 99.99

        stored = await store.get_by_id(order.id)
        assert stored.items[0].price == 12.99
        assert stored.total_amount == 12.99


class TestOrderValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id,items", [
        (None, [{"bookId": "b1", "quantity": 1}]),
        ("", [{"bookId": "b1", "quantity": 1}]),
        ("u1", None),
        ("u1", []),
        ("u1", "b1"),
    ])
    async def test_missing_user_or_items(self, store, user_id, items):
        workflow = make_workflow(store, make_catalog({"b1": 12.99}), make_identity())

        with pytest.raises(InvalidRequest, match="UserId and items are required"):
            await workflow.create(user_id, items)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("item", [
        {"quantity": 1},
        {"bookId": "", "quantity": 1},
        {"bookId": "b1"},
        {"bookId": "b1", "quantity": 0},
        {"bookId": "b1", "quantity": -2},
        {"bookId": "b1", "quantity": "many"},
    ])
    async def test_invalid_item(self, store, item):
        workflow = make_workflow(store, make_catalog({"b1": 12.99}), make_identity())

        with pytest.raises(InvalidRequest, match="Each item must have bookId and positive quantity"):
            await workflow.create("u1", [item])

    @pytest.mark.asyncio
    async def test_invalid_item_aborts_before_any_lookup(self, store):
        catalog = make_catalog({"b1": 12.99})
        identity = make_identity()
        workflow = make_workflow(store, catalog, identity)

        with pytest.raises(InvalidRequest):
            await workflow.create("u1", [
                {"bookId": "b1", "quantity": 1},
                {"bookId": "b1", "quantity": 0},
            ])

        catalog.get_book_price.assert_not_awaited()
        identity.get_user.assert_not_awaited()
        assert await store.list() == []
