# printshop/customers/routes.py

import logging

from flask import Blueprint, request, jsonify, current_app
from printshop.database import atomic
from printshop.customers.utils import search_customers, serialize_customer, upsert_customer
from printshop.utils import json_object

bp = Blueprint('customers', __name__)


@bp.route('', methods=['GET'])
def search():
    q = request.args.get('q', '')
    limit = current_app.config.get('CUSTOMER_SEARCH_LIMIT', 10)
    return jsonify([serialize_customer(c) for c in search_customers(q, limit=limit)])


@bp.route('/upsert', methods=['POST'])
def upsert():
    data = json_object()
    with atomic('Failed to upsert customer'):
        customer_id = upsert_customer(data)
    logging.info('customer upserted id=%s', customer_id)
    return jsonify(customerId=customer_id)
