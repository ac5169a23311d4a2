# printshop/storage.py
"""File storage for invoice PDFs.

The data service only ever talks to ``InvoiceStorage`` through two calls:
``store(invoice_id, data)`` returns a public link and ``serve(link)`` gives
the bytes back.  ``LocalInvoiceStorage`` keeps the files in a directory on
disk; the instance is attached to the app as ``app.extensions['invoice_storage']``.
"""

import base64
import binascii
import os

from flask import current_app
from werkzeug.utils import secure_filename

from printshop.errors import NotFoundError, ValidationError

LINK_PREFIX = '/invoices/'


class InvoiceStorage:
    def store(self, invoice_id: int, data: bytes) -> str:
        raise NotImplementedError

    def serve(self, link: str) -> bytes:
        raise NotImplementedError

    def remove(self, link: str) -> None:
        raise NotImplementedError


class LocalInvoiceStorage(InvoiceStorage):
    """Store ``<invoice_id>.pdf`` files under ``root``."""

    def __init__(self, root: str) -> None:
        self.root = root

    def _path(self, link: str) -> str:
        name = secure_filename(link.rsplit('/', 1)[-1])
        if not name:
            raise NotFoundError('File not found')
        return os.path.join(self.root, name)

    def store(self, invoice_id: int, data: bytes) -> str:
        os.makedirs(self.root, exist_ok=True)
        filename = f"{invoice_id}.pdf"
        with open(os.path.join(self.root, filename), 'wb') as fh:
            fh.write(data)
        return LINK_PREFIX + filename

    def serve(self, link: str) -> bytes:
        path = self._path(link)
        if not os.path.isfile(path):
            raise NotFoundError('File not found')
        with open(path, 'rb') as fh:
            return fh.read()

    def remove(self, link: str) -> None:
        path = self._path(link)
        if os.path.isfile(path):
            os.remove(path)


def init_storage(app, storage: InvoiceStorage | None = None) -> None:
    app.extensions['invoice_storage'] = storage or LocalInvoiceStorage(
        app.config['INVOICE_STORAGE_DIR']
    )


def get_storage() -> InvoiceStorage:
    return current_app.extensions['invoice_storage']


def decode_pdf_data(pdf_data: str | None) -> bytes:
    """Decode a ``data:application/pdf;base64,...`` URL (or bare base64)."""
    if not pdf_data:
        raise ValidationError('No PDF data provided')
    encoded = pdf_data.split(',', 1)[1] if ',' in pdf_data else pdf_data
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError('PDF data is not valid base64')
