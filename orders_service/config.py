"""
Orders service configuration

Every external dependency of the order workflow is named here so tests can
inject their own values.
"""

from pydantic import field_validator

from shared.utils.config import ServiceSettings


class OrdersSettings(ServiceSettings):
    """Order service settings"""

    service_name: str = "orders-service"
    orders_port: int = 3003

    # Dependencies
    books_service_url: str = "http://localhost:3001"
    users_service_url: str = "http://localhost:3002"
    dependency_timeout: float = 5.0

    # Unit price used when the catalog cannot price an item
    default_book_price: float = 10.99

    @field_validator('dependency_timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('dependency_timeout must be positive')
        return v

    @field_validator('default_book_price')
    @classmethod
    def validate_default_price(cls, v):
        if v < 0:
            raise ValueError('default_book_price must not be negative')
        return v
