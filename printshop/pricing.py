# printshop/pricing.py

"""Total computation shared by estimates and invoices."""

from typing import Iterable, Tuple

from printshop import db
from printshop.errors import NotFoundError, ValidationError
from printshop.models import ProductVariation

TAX_RATE = 1.06

Line = Tuple[float, int]


def compute_total(variation_lines: Iterable[Line], custom_lines: Iterable[Line]) -> float:
    """Sum ``price * quantity`` over both line sets, apply tax, round to cents."""
    subtotal = sum(price * qty for price, qty in variation_lines)
    subtotal += sum(price * qty for price, qty in custom_lines)
    return round(subtotal * TAX_RATE, 2)


def _quantity(item: dict) -> int:
    try:
        return int(item.get('quantity', 1))
    except (TypeError, ValueError):
        raise ValidationError('quantity must be a whole number')


def price_variation_lines(items: list) -> list:
    """
    Look up the current price of every ``{variation_id, quantity}`` entry.
    Client-supplied prices are never trusted.
    """
    lines = []
    for item in items:
        vid = item.get('variation_id')
        if vid is None:
            raise ValidationError('variation_id is required')
        variation = db.session.get(ProductVariation, vid)
        if variation is None:
            raise NotFoundError(f'Variation {vid} not found')
        lines.append((variation.price or 0.0, _quantity(item)))
    return lines


def price_custom_lines(items: list) -> list:
    lines = []
    for item in items:
        try:
            price = float(item.get('price'))
        except (TypeError, ValueError):
            raise ValidationError('custom item price must be a number')
        lines.append((price, _quantity(item)))
    return lines
