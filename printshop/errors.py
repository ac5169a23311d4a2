"""Error taxonomy for the order data service.

Views and helpers raise these exceptions; the handlers registered by
``register_error_handlers`` translate them into a short JSON body of the
form ``{"error": "..."}`` with the matching HTTP status.  Raw datastore
errors are only echoed back under ``details`` when ``EXPOSE_ERROR_DETAILS``
is switched on.
"""

import logging

from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from printshop import db


class ShopError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message: str | None = None, details: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details


class ValidationError(ShopError):
    """A required field is missing or malformed."""
    status_code = 400
    message = 'Invalid request'


class NotFoundError(ShopError):
    """A referenced row does not exist."""
    status_code = 404
    message = 'Not found'


class DataStoreError(ShopError):
    """An underlying query failed."""
    status_code = 500
    message = 'Internal server error'


def error_response(err: ShopError):
    body = {'error': err.message}
    if err.details and current_app.config.get('EXPOSE_ERROR_DETAILS'):
        body['details'] = err.details
    return jsonify(body), err.status_code


def register_error_handlers(app) -> None:
    @app.errorhandler(ShopError)
    def handle_shop_error(err):
        if err.status_code >= 500:
            logging.error('%s: %s', err.message, err.details)
        else:
            logging.warning('%s %s', err.status_code, err.message)
        return error_response(err)

    @app.errorhandler(SQLAlchemyError)
    def handle_datastore_error(err):
        db.session.rollback()
        logging.exception('query failed: %s', err)
        return error_response(DataStoreError(details=str(err)))

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify(error=err.description), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        logging.exception('unhandled error: %s', err)
        return jsonify(error='Internal server error'), 500
