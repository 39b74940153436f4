"""
Shared data schemas for the Bookstore services

This package contains common data schemas used across all microservices.
"""

from .book import Book, BookCreate, BookUpdate
from .user import User, UserCreate, UserUpdate
from .order import (
    Order,
    OrderLine,
    OrderStatus,
    OrderCreate,
    OrderItemRequest,
    StatusUpdate,
    OrderCancelResponse,
)

__all__ = [
    "Book",
    "BookCreate",
    "BookUpdate",
    "User",
    "UserCreate",
    "UserUpdate",
    "Order",
    "OrderLine",
    "OrderStatus",
    "OrderCreate",
    "OrderItemRequest",
    "StatusUpdate",
    "OrderCancelResponse",
]

__version__ = "1.0.0"
