# printshop/estimates/routes.py

import logging
from datetime import datetime

from flask import Blueprint, jsonify
from printshop import db
from printshop.database import atomic
from printshop.errors import NotFoundError, ValidationError
from printshop.utils import json_object
from printshop.models import Estimate
from printshop.line_items import (
    ESTIMATES,
    add_items,
    clear_items,
    parse_order_payload,
    payload_total,
    serialize_items,
    subtotal_columns,
    total_from_subtotals,
)

bp = Blueprint('estimates', __name__)


def _get_estimate(estimate_id) -> Estimate:
    est = db.session.get(Estimate, estimate_id)
    if est is None:
        raise NotFoundError(f'Estimate {estimate_id} not found')
    return est


@bp.route('', methods=['GET'])
def list_estimates():
    """
    All estimates, newest first.  ``total`` is recomputed from current
    catalog prices, so it can differ from the total stored at save time.
    """
    rows = (
        db.session.query(Estimate, *subtotal_columns(ESTIMATES))
        .order_by(Estimate.estimate_date.desc(), Estimate.id.desc())
        .all()
    )
    return jsonify([{
        'id'            : e.id,
        'customer_id'   : e.customer_id,
        'customer_info' : e.customer_info,
        'estimate_date' : e.estimate_date.isoformat(),
        'total'         : total_from_subtotals(catalog, custom),
    } for e, catalog, custom in rows])


@bp.route('', methods=['POST'])
def create_estimate():
    payload = parse_order_payload(json_object())
    if not payload.customer_id:
        raise ValidationError('customer_id is required')

    with atomic('Failed to save estimate'):
        total = payload_total(payload)
        est = Estimate(
            customer_id   = payload.customer_id,
            customer_info = payload.customer_info,
            store_info    = {},
            estimate_date = datetime.utcnow(),
            total         = total,
        )
        db.session.add(est)
        db.session.flush()  # obtain est.id
        add_items(ESTIMATES, est.id, payload)
        estimate_id = est.id

    logging.info('estimate created id=%s total=%.2f', estimate_id, total)
    return jsonify(message='Estimate saved', estimateId=estimate_id), 201


@bp.route('/<int:estimate_id>', methods=['GET'])
def view_estimate(estimate_id):
    est = _get_estimate(estimate_id)
    return jsonify(
        id            = est.id,
        customer_id   = est.customer_id,
        customer_info = est.customer_info,
        estimate_date = est.estimate_date.isoformat(),
        total         = est.total,
        items         = serialize_items(ESTIMATES, est.id),
    )


@bp.route('/<int:estimate_id>', methods=['PUT'])
def update_estimate(estimate_id):
    payload = parse_order_payload(json_object())

    with atomic('Failed to update estimate'):
        est = _get_estimate(estimate_id)
        total = payload_total(payload)
        est.customer_id   = payload.customer_id
        est.customer_info = payload.customer_info
        est.estimate_date = datetime.utcnow()
        est.total         = total
        # Replace the item sets wholesale
        clear_items(ESTIMATES, estimate_id)
        add_items(ESTIMATES, estimate_id, payload)

    logging.info('estimate updated id=%s total=%.2f', estimate_id, total)
    return jsonify(message='Estimate updated', estimateId=estimate_id)


@bp.route('/<int:estimate_id>/items', methods=['GET'])
def estimate_items(estimate_id):
    return jsonify(serialize_items(ESTIMATES, estimate_id))


@bp.route('/<int:estimate_id>', methods=['DELETE'])
def delete_estimate(estimate_id):
    with atomic('Failed to delete estimate'):
        est = _get_estimate(estimate_id)
        # 1) children first, 2) then the estimate itself
        clear_items(ESTIMATES, estimate_id)
        db.session.delete(est)
    logging.info('estimate deleted id=%s', estimate_id)
    return jsonify(message='Estimate deleted')
