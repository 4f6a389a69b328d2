"""
Order pricing.

Pure and deterministic: the same function prices a checkout quote and the
persisted order, so the server never has to trust a client-computed total.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple

from .exceptions import EmptyOrderError

TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("100")
FLAT_SHIPPING = Decimal("10")

CENT = Decimal("0.01")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_totals(lines: Iterable[Tuple[Decimal, int]]) -> OrderTotals:
    """Price `(unit_price, quantity)` lines.

    tax is 8% of the subtotal rounded half-up to the cent, shipping is free from
    100 upwards and 10 below, total is the exact sum of the three.
    """
    lines = list(lines)
    if not lines:
        raise EmptyOrderError()

    subtotal = Decimal("0")
    for unit_price, quantity in lines:
        unit_price = Decimal(str(unit_price))
        if unit_price < 0:
            raise ValueError(f"Unit price cannot be negative: {unit_price}")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(f"Quantity must be a positive integer: {quantity!r}")
        subtotal += unit_price * quantity

    subtotal = to_money(subtotal)
    tax = to_money(subtotal * TAX_RATE)
    shipping = Decimal("0.00") if subtotal >= FREE_SHIPPING_THRESHOLD else to_money(FLAT_SHIPPING)
    return OrderTotals(subtotal=subtotal, tax=tax, shipping=shipping, total=subtotal + tax + shipping)
