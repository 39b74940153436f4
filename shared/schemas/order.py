"""
Order data schemas

Wire format uses camelCase field names (userId, totalAmount, createdAt);
Python code uses the snake_case attribute names.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderStatus(str, Enum):
    """Order status enumeration"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> List[str]:
        return [status.value for status in cls]


class OrderItemRequest(BaseModel):
    """One requested item; completeness is checked by the order workflow"""
    model_config = ConfigDict(populate_by_name=True)

    book_id: Optional[str] = Field(None, alias="bookId")
    quantity: Optional[int] = None

    @field_validator('book_id', mode='before')
    @classmethod
    def normalize_book_id(cls, v):
        """Numeric ids are accepted as their string form"""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class OrderCreate(BaseModel):
    """Schema for POST /api/orders"""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    # Shape is checked by the order workflow so malformed items get its messages
    items: Optional[Any] = None


class StatusUpdate(BaseModel):
    """Schema for PATCH /api/orders/{id}/status"""
    status: Optional[str] = None


class OrderLine(BaseModel):
    """A priced line; the price is a snapshot taken at order creation"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    book_id: str = Field(..., alias="bookId")
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class Order(BaseModel):
    """Full order record"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str = Field(..., alias="userId")
    items: List[OrderLine]
    total_amount: float = Field(..., alias="totalAmount")
    status: OrderStatus = OrderStatus.PENDING
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="createdAt"
    )


class OrderCancelResponse(BaseModel):
    message: str
    order: Order
