"""
Price resolution results and order total arithmetic
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple, Union

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Resolved:
    """The catalog priced the item"""
    book_id: str
    price: float

    @property
    def defaulted(self) -> bool:
        return False


@dataclass(frozen=True)
class Defaulted:
    """The catalog lookup failed and the fallback price was used"""
    book_id: str
    price: float
    reason: str

    @property
    def defaulted(self) -> bool:
        return True


PriceResolution = Union[Resolved, Defaulted]


def order_total(lines: Iterable[Tuple[float, int]]) -> float:
    """
    Sum price x quantity and round to cents, half away from zero.

    Prices go through str() so 12.99 is summed as the decimal 12.99 rather
    than its binary approximation.
    """
    total = sum(
        (Decimal(str(price)) * quantity for price, quantity in lines),
        Decimal("0")
    )
    return float(total.quantize(CENT, rounding=ROUND_HALF_UP))
