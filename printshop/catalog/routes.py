# printshop/catalog/routes.py

import logging

from flask import Blueprint, jsonify
from printshop import db
from printshop.database import atomic
from printshop.errors import NotFoundError, ValidationError
from printshop.models import Product, ProductVariation
from printshop.catalog.utils import serialize_product, serialize_variation
from printshop.utils import json_object, parse_price

bp = Blueprint('catalog', __name__)


@bp.route('/products', methods=['GET'])
def list_products():
    """
    Products that have at least one variation, each with its variations.
    Products without variations are not orderable and are left out.
    """
    products = (
        Product.query
        .join(ProductVariation, ProductVariation.product_id == Product.id)
        .distinct()
        .order_by(Product.id)
        .all()
    )
    return jsonify([serialize_product(p) for p in products])


@bp.route('/products/<int:product_id>/variations', methods=['POST'])
def add_variation(product_id):
    data = json_object()
    size = data.get('size')
    if not size or data.get('price') is None:
        raise ValidationError('Size and price are required')
    price = parse_price(data['price'])

    if db.session.get(Product, product_id) is None:
        raise NotFoundError(f'Product {product_id} not found')

    with atomic('Failed to add variation'):
        v = ProductVariation(
            product_id = product_id,
            size       = size,
            price      = price,
            accessory  = data.get('accessory') or 'None',
            quantity   = data.get('quantity'),
        )
        db.session.add(v)
    logging.info('variation added id=%s product=%s', v.id, product_id)
    return jsonify(message='Variation added', variation=serialize_variation(v)), 201


@bp.route('/variations/<int:variation_id>/price', methods=['PUT'])
def update_variation_price(variation_id):
    price = parse_price(json_object().get('price'))
    with atomic('Failed to update price'):
        db.session.query(ProductVariation) \
            .filter_by(id=variation_id) \
            .update({'price': price})
    return jsonify(message='Price updated successfully')


@bp.route('/variations/<int:variation_id>', methods=['DELETE'])
def delete_variation(variation_id):
    with atomic('Failed to delete variation'):
        db.session.query(ProductVariation).filter_by(id=variation_id).delete()
    return jsonify(message='Variation deleted')
