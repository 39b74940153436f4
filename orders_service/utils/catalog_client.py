"""
Books Service HTTP Client
Looks up book prices for the order workflow
"""

import math
from numbers import Real
from typing import Any, Dict
from urllib.parse import quote

from shared.utils.service_client import BaseServiceClient, ServiceClientError


class CatalogServiceClient(BaseServiceClient):
    """HTTP client for the books service"""

    service_name = "books-service"

    async def get_book(self, book_id: str) -> Dict[str, Any]:
        result = await self._make_request("GET", f"/api/books/{quote(book_id, safe='')}")
        if not isinstance(result, dict):
            raise ServiceClientError(self.service_name, f"unexpected body for book {book_id}")
        return result

    async def get_book_price(self, book_id: str) -> float:
        """Current catalog price; raises ServiceClientError when it cannot be determined"""
        book = await self.get_book(book_id)
        price = book.get("price")
        # json accepts NaN and Infinity literals
        if isinstance(price, bool) or not isinstance(price, Real):
            raise ServiceClientError(self.service_name, f"invalid price {price!r} for book {book_id}")
        if not math.isfinite(price) or price < 0:
            raise ServiceClientError(self.service_name, f"invalid price {price!r} for book {book_id}")
        return float(price)
