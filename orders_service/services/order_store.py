"""
Order store: the lifecycle boundary for orders

Orders are appended once and afterwards only their status changes.
"""

import asyncio
from typing import List, Optional, Union
import structlog

from shared.schemas.order import Order, OrderStatus
from shared.utils.errors import InternalError, InvalidRequest, NotFound
from shared.utils.store import RecordStore

logger = structlog.get_logger(__name__)

SAMPLE_ORDERS = [
    {
        "userId": "user-1",
        "items": [
            {"bookId": "book-1", "quantity": 2, "price": 12.99},
            {"bookId": "book-2", "quantity": 1, "price": 14.99},
        ],
        "totalAmount": 40.97,
        "status": "confirmed",
    },
]


class OrderStore:
    """Order lifecycle operations over an injected record store"""

    def __init__(self, records: RecordStore[Order]):
        self.records = records
        # Serializes every mutation
        self._lock = asyncio.Lock()

    async def seed(self) -> None:
        for data in SAMPLE_ORDERS:
            await self.add(Order.model_validate(data))

    async def add(self, order: Order) -> Order:
        async with self._lock:
            try:
                await self.records.insert(order.id, order)
            except KeyError as e:
                logger.error("Order id collision", order_id=order.id)
                raise InternalError("Failed to create order") from e
        logger.info("Order stored", order_id=order.id, user_id=order.user_id, total=order.total_amount)
        return order

    async def list(self, user_id: Optional[str] = None, status: Optional[str] = None) -> List[Order]:
        """Orders matching every given filter, in insertion order"""
        orders = await self.records.list()
        if user_id:
            orders = [o for o in orders if o.user_id == user_id]
        if status:
            orders = [o for o in orders if o.status.value == status]
        return orders

    async def get_by_id(self, order_id: str) -> Order:
        order = await self.records.get(order_id)
        if order is None:
            raise NotFound("Order not found")
        return order

    async def set_status(self, order_id: str, status: Union[str, OrderStatus, None]) -> Order:
        """
        Overwrite the status of an order.

        Any status may follow any other, including leaving cancelled.
        """
        if isinstance(status, OrderStatus):
            new_status = status
        elif status in OrderStatus.values():
            new_status = OrderStatus(status)
        else:
            raise InvalidRequest("Valid status is required")

        async with self._lock:
            order = await self.records.get(order_id)
            if order is None:
                raise NotFound("Order not found")
            updated = order.model_copy(update={"status": new_status})
            await self.records.update(order_id, updated)

        logger.info("Order status updated", order_id=order_id, old_status=order.status.value, status=new_status.value)
        return updated

    async def cancel(self, order_id: str) -> Order:
        return await self.set_status(order_id, OrderStatus.CANCELLED)
