# storefront/services/pricing.py
"""
Price arithmetic shared by checkout and the cart validation preview.

Prices are floats. Discounted unit prices and line subtotals are rounded
to 2 decimals when computed; cart totals over stored snapshots are not.
"""

from typing import Iterable


def final_unit_price(price: float, discount: float | None = None) -> float:
    """
    Discounted unit price: price * (1 - discount), discount defaulting to 0.
    """
    return round(price * (1 - (discount or 0)), 2)


def line_subtotal(unit_price: float, quantity: int) -> float:
    return round(unit_price * quantity, 2)


def order_total(subtotals: Iterable[float]) -> float:
    return round(sum(subtotals, 0.0), 2)
