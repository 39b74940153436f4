"""
Order creation workflow

Validates an order request, prices each item against the books service,
checks the user against the users service, and stores the priced order.

Dependency failures never fail an order:
- an item the catalog cannot price gets the configured default price
- a user that cannot be verified is logged and otherwise ignored
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError
import structlog

from shared.schemas.order import Order, OrderItemRequest, OrderLine, OrderStatus
from shared.utils.errors import InvalidRequest
from shared.utils.service_client import ServiceClientError
from orders_service.services.order_store import OrderStore
from orders_service.services.pricing import Defaulted, PriceResolution, Resolved, order_total
from orders_service.utils.catalog_client import CatalogServiceClient
from orders_service.utils.identity_client import IdentityServiceClient

logger = structlog.get_logger(__name__)

ItemInput = Union[OrderItemRequest, Mapping[str, Any]]


@dataclass
class OrderPlacement:
    """A stored order together with how it was priced"""
    order: Order
    pricing: List[PriceResolution] = field(default_factory=list)
    user_verified: bool = False

    @property
    def defaulted_count(self) -> int:
        return sum(1 for resolution in self.pricing if resolution.defaulted)

    @property
    def fully_priced(self) -> bool:
        return self.defaulted_count == 0


class OrderWorkflow:
    """Creates orders; the only writer of new orders into the store"""

    def __init__(
        self,
        store: OrderStore,
        catalog: CatalogServiceClient,
        identity: IdentityServiceClient,
        default_price: float
    ):
        self.store = store
        self.catalog = catalog
        self.identity = identity
        self.default_price = default_price

    @staticmethod
    def validate(user_id: Optional[str], items: Optional[Sequence[ItemInput]]) -> List[OrderItemRequest]:
        """Return normalized items or raise InvalidRequest for the first problem found"""
        if not user_id or not isinstance(items, (list, tuple)) or not items:
            raise InvalidRequest("UserId and items are required")

        validated = []
        for item in items:
            if not isinstance(item, OrderItemRequest):
                try:
                    item = OrderItemRequest.model_validate(item)
                except ValidationError:
                    raise InvalidRequest("Each item must have bookId and positive quantity")
            if not item.book_id or not item.quantity or item.quantity <= 0:
                raise InvalidRequest("Each item must have bookId and positive quantity")
            validated.append(item)
        return validated

    async def _verify_user(self, user_id: str) -> bool:
        try:
            await self.identity.get_user(user_id)
            return True
        except ServiceClientError as e:
            logger.warning("Could not verify user existence", user_id=user_id, error=str(e))
            return False

    async def _resolve_price(self, book_id: str) -> PriceResolution:
        try:
            price = await self.catalog.get_book_price(book_id)
            return Resolved(book_id=book_id, price=price)
        except ServiceClientError as e:
            logger.warning(
                "Could not fetch book price, using default",
                book_id=book_id,
                default_price=self.default_price,
                error=str(e)
            )
            return Defaulted(book_id=book_id, price=self.default_price, reason=str(e))

    async def place_order(self, user_id: Optional[str], items: Optional[Sequence[ItemInput]]) -> OrderPlacement:
        """Create and store an order, reporting which prices were defaulted"""
        validated = self.validate(user_id, items)

        # gather() returns results in argument order, whatever order they finish in
        user_verified, *pricing = await asyncio.gather(
            self._verify_user(user_id),
            *(self._resolve_price(item.book_id) for item in validated)
        )

        lines = [
            OrderLine(book_id=item.book_id, quantity=item.quantity, price=resolution.price)
            for item, resolution in zip(validated, pricing)
        ]
        order = Order(
            user_id=user_id,
            items=lines,
            total_amount=order_total((line.price, line.quantity) for line in lines),
            status=OrderStatus.PENDING
        )
        await self.store.add(order)

        placement = OrderPlacement(order=order, pricing=pricing, user_verified=user_verified)
        logger.info(
            "Order created",
            order_id=order.id,
            user_id=user_id,
            items=len(lines),
            total=order.total_amount,
            defaulted_prices=placement.defaulted_count,
            user_verified=user_verified
        )
        return placement

    async def create(self, user_id: Optional[str], items: Optional[Sequence[ItemInput]]) -> Order:
        placement = await self.place_order(user_id, items)
        return placement.order
