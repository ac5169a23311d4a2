# printshop/invoices/routes.py

import logging
from datetime import datetime

from flask import Blueprint, jsonify, make_response
from printshop import db
from printshop.database import atomic
from printshop.errors import NotFoundError
from printshop.models import Invoice
from printshop.line_items import (
    INVOICES,
    add_items,
    clear_items,
    parse_order_payload,
    payload_total,
    serialize_items,
)
from printshop.storage import decode_pdf_data, get_storage
from printshop.utils import json_object

bp = Blueprint('invoices', __name__)

# Stored PDFs live outside /api
files_bp = Blueprint('invoice_files', __name__)


def _get_invoice(invoice_id) -> Invoice:
    inv = db.session.get(Invoice, invoice_id)
    if inv is None:
        raise NotFoundError(f'Invoice {invoice_id} not found')
    return inv


@bp.route('', methods=['GET'])
def list_invoices():
    invs = Invoice.query.order_by(Invoice.invoice_date.desc(), Invoice.id.desc()).all()
    return jsonify([{
        'id'            : i.id,
        'customer_id'   : i.customer_id,
        'customer_info' : i.customer_info,
        'invoice_date'  : i.invoice_date.isoformat(),
        'total'         : round(i.total or 0.0, 2),
        'pdf_link'      : i.pdf_link,
    } for i in invs])


@bp.route('', methods=['POST'])
def create_invoice():
    """Invoices are priced once, here; the stored total is never recomputed."""
    payload = parse_order_payload(json_object())

    with atomic('Failed to save invoice'):
        total = payload_total(payload)
        inv = Invoice(
            customer_id   = payload.customer_id,
            customer_info = payload.customer_info,
            invoice_date  = datetime.utcnow(),
            total         = total,
        )
        db.session.add(inv)
        db.session.flush()  # obtain inv.id
        add_items(INVOICES, inv.id, payload)
        invoice_id = inv.id

    logging.info('invoice created id=%s total=%.2f', invoice_id, total)
    return jsonify(message='Invoice saved', invoiceId=invoice_id), 201


@bp.route('/<int:invoice_id>/items', methods=['GET'])
def invoice_items(invoice_id):
    return jsonify(serialize_items(INVOICES, invoice_id))


@bp.route('/<int:invoice_id>', methods=['DELETE'])
def delete_invoice(invoice_id):
    with atomic('Failed to delete invoice'):
        inv = _get_invoice(invoice_id)
        pdf_link = inv.pdf_link
        clear_items(INVOICES, invoice_id)
        db.session.delete(inv)
    if pdf_link:
        get_storage().remove(pdf_link)
    logging.info('invoice deleted id=%s', invoice_id)
    return jsonify(message='Invoice deleted')


@bp.route('/<int:invoice_id>/pdf', methods=['POST'])
def attach_pdf(invoice_id):
    data = json_object()
    pdf_bytes = decode_pdf_data(data.get('pdfData'))
    with atomic('Failed to save PDF'):
        inv = _get_invoice(invoice_id)
        inv.pdf_link = get_storage().store(invoice_id, pdf_bytes)
        pdf_link = inv.pdf_link
    return jsonify(message='PDF saved', pdfLink=pdf_link)


@files_bp.route('/<path:filename>', methods=['GET'])
def serve_pdf(filename):
    resp = make_response(get_storage().serve(filename))
    resp.mimetype = 'application/pdf'
    return resp
