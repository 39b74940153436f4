"""
Pytest fixtures shared by the service tests
"""

from typing import Callable, Dict

import httpx
import pytest

from books_service.config import BooksSettings
from gateway.config import GatewaySettings
from orders_service.config import OrdersSettings
from users_service.config import UsersSettings

BOOKS_URL = "http://books.test"
USERS_URL = "http://users.test"
ORDERS_URL = "http://orders.test"


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


def backend_transport(routes: Dict[str, Callable[[httpx.Request], httpx.Response]]) -> httpx.MockTransport:
    """MockTransport dispatching on request host; unknown hosts refuse the connection"""

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.host)
        if route is None:
            raise httpx.ConnectError("Connection refused", request=request)
        return route(request)

    return httpx.MockTransport(handler)


@pytest.fixture
def catalog_prices() -> Dict[str, float]:
    return {"b1": 12.99, "b2": 14.99, "b3": 45.99}


@pytest.fixture
def catalog_route(catalog_prices):
    """Books service returning catalog_prices, 404 for anything else"""

    def route(request: httpx.Request) -> httpx.Response:
        book_id = request.url.path.rsplit("/", 1)[-1]
        if book_id in catalog_prices:
            return httpx.Response(200, json={"id": book_id, "title": "Book", "price": catalog_prices[book_id]})
        return httpx.Response(404, json={"error": "Book not found", "code": 404})

    return route


@pytest.fixture
def identity_route():
    """Users service that knows user u1"""

    def route(request: httpx.Request) -> httpx.Response:
        user_id = request.url.path.rsplit("/", 1)[-1]
        if user_id == "u1":
            return httpx.Response(200, json={"id": "u1", "name": "John Doe", "email": "john.doe@example.com"})
        return httpx.Response(404, json={"error": "User not found", "code": 404})

    return route


@pytest.fixture
def orders_settings() -> OrdersSettings:
    return OrdersSettings(
        books_service_url=BOOKS_URL,
        users_service_url=USERS_URL,
        dependency_timeout=1.0,
        default_book_price=10.99,
        seed_sample_data=False
    )


@pytest.fixture
def gateway_settings() -> GatewaySettings:
    return GatewaySettings(
        books_service_url=BOOKS_URL,
        users_service_url=USERS_URL,
        orders_service_url=ORDERS_URL,
        proxy_timeout=1.0,
        health_probe_timeout=0.5
    )


@pytest.fixture
def books_settings() -> BooksSettings:
    return BooksSettings(seed_sample_data=False)


@pytest.fixture
def users_settings() -> UsersSettings:
    return UsersSettings(seed_sample_data=False)


@pytest.fixture
def make_transport():
    return backend_transport
