"""Scoped transaction helper shared by the blueprints."""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from printshop import db
from printshop.errors import DataStoreError


@contextmanager
def atomic(action: str = 'Database operation failed'):
    """Run a block of writes as one transaction.

    Commits when the block exits cleanly and rolls back on any exception.
    Datastore failures are re-raised as ``DataStoreError`` carrying
    ``action`` as the client-facing message.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logging.exception('%s: %s', action, e)
        raise DataStoreError(action, details=str(e)) from e
    except Exception:
        db.session.rollback()
        raise
