# printshop/line_items.py

"""Item persistence and serialization shared by estimates and invoices.

Estimates and invoices use the same item model: a header row, a set of
catalog items (variation id + quantity, priced from the catalog) and a set
of custom items priced inline.  ``ItemFamily`` names the three models and
the foreign key column for one of the two document kinds so the helpers
below can serve both.
"""

from typing import NamedTuple

from sqlalchemy import func, select

from printshop import db
from printshop.errors import ValidationError
from printshop.models import (
    CustomEstimateItem,
    CustomInvoiceItem,
    Estimate,
    EstimateItem,
    Invoice,
    InvoiceItem,
    Product,
    ProductVariation,
)
from printshop.pricing import compute_total, price_custom_lines, price_variation_lines


class ItemFamily(NamedTuple):
    header: type
    item: type
    custom_item: type
    fk: str


ESTIMATES = ItemFamily(Estimate, EstimateItem, CustomEstimateItem, 'estimate_id')
INVOICES = ItemFamily(Invoice, InvoiceItem, CustomInvoiceItem, 'invoice_id')


class OrderPayload(NamedTuple):
    customer_id: int | None
    customer_info: dict | None
    variation_items: list
    custom_items: list


def parse_order_payload(data: dict) -> OrderPayload:
    """Pull the shared estimate/invoice fields out of a request body."""
    variation_items = data.get('variationItems') or []
    custom_items = data.get('customItems') or []
    if not isinstance(variation_items, list) or not isinstance(custom_items, list):
        raise ValidationError('variationItems and customItems must be lists')
    if not all(isinstance(it, dict) for it in variation_items + custom_items):
        raise ValidationError('line items must be objects')
    return OrderPayload(
        customer_id=data.get('customer_id'),
        customer_info=data.get('customer_info'),
        variation_items=variation_items,
        custom_items=custom_items,
    )


def payload_total(payload: OrderPayload) -> float:
    return compute_total(
        price_variation_lines(payload.variation_items),
        price_custom_lines(payload.custom_items),
    )


def add_items(family: ItemFamily, header_id: int, payload: OrderPayload) -> None:
    """Insert both item sets for ``header_id`` in submission order."""
    for it in payload.variation_items:
        db.session.add(family.item(
            product_variation_id = it.get('variation_id'),
            quantity             = int(it.get('quantity', 1)),
            **{family.fk: header_id}
        ))
    for it in payload.custom_items:
        db.session.add(family.custom_item(
            product_name = it.get('product_name'),
            size         = it.get('size'),
            price        = float(it.get('price')),
            quantity     = int(it.get('quantity', 1)),
            accessory    = it.get('accessory'),
            **{family.fk: header_id}
        ))


def clear_items(family: ItemFamily, header_id: int) -> None:
    """Delete every item row of both kinds for ``header_id``."""
    db.session.query(family.item).filter_by(**{family.fk: header_id}).delete()
    db.session.query(family.custom_item).filter_by(**{family.fk: header_id}).delete()


def serialize_items(family: ItemFamily, header_id: int) -> list:
    """
    Combined item list: catalog items first, joined with the product name
    and current variation price, then custom items.  Catalog items whose
    variation no longer exists are left out.
    """
    item = family.item
    rows = (
        db.session.query(item, ProductVariation, Product)
        .join(ProductVariation, item.product_variation_id == ProductVariation.id)
        .join(Product, ProductVariation.product_id == Product.id)
        .filter(getattr(item, family.fk) == header_id)
        .order_by(item.id)
        .all()
    )
    customs = (
        family.custom_item.query
        .filter_by(**{family.fk: header_id})
        .order_by(family.custom_item.id)
        .all()
    )
    out = [{
        'type'         : 'variation',
        'product_name' : p.name,
        'size'         : v.size,
        'price'        : v.price,
        'quantity'     : it.quantity,
        'accessory'    : v.accessory,
        'variation_id' : v.id,
    } for it, v, p in rows]
    out.extend({
        'type'         : 'custom',
        'product_name' : c.product_name,
        'size'         : c.size,
        'price'        : c.price,
        'quantity'     : c.quantity,
        'accessory'    : c.accessory,
        'variation_id' : None,
    } for c in customs)
    return out


def subtotal_columns(family: ItemFamily) -> tuple:
    """
    Correlated subqueries giving, per header row, the catalog subtotal at
    today's prices and the custom subtotal.  Select them next to the header
    model to price a whole listing in one statement.
    """
    item, custom = family.item, family.custom_item
    header_id = family.header.id
    catalog = (
        select(func.coalesce(func.sum(ProductVariation.price * item.quantity), 0.0))
        .select_from(item)
        .join(ProductVariation, item.product_variation_id == ProductVariation.id)
        .join(Product, ProductVariation.product_id == Product.id)
        .where(getattr(item, family.fk) == header_id)
        .correlate(family.header)
        .scalar_subquery()
    )
    custom_sum = (
        select(func.coalesce(func.sum(custom.price * custom.quantity), 0.0))
        .where(getattr(custom, family.fk) == header_id)
        .correlate(family.header)
        .scalar_subquery()
    )
    return catalog.label('catalog_subtotal'), custom_sum.label('custom_subtotal')


def total_from_subtotals(catalog_subtotal, custom_subtotal) -> float:
    return compute_total([(float(catalog_subtotal or 0), 1)], [(float(custom_subtotal or 0), 1)])
