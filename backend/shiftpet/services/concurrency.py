# Overview: Transaction helpers shared by every service that mutates the stat store.

from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from ..errors import StoreError
from ..extensions import db


def lock_for_update(query):
    """
    Apply row-level locking for critical operations.

    NOTE: SQLite ignores SELECT ... FOR UPDATE, but other DBs will honor it.
    """
    return query.with_for_update()


@contextmanager
def atomic(action: str):
    """
    Run a compound store mutation as one unit.

    Commits when the block exits cleanly. Any exception rolls back every
    statement issued inside the block; SQLAlchemy failures surface as
    StoreError carrying the driver's diagnostic.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError(f"{action} failed: {exc.__class__.__name__}: {exc}") from exc
    except Exception:
        db.session.rollback()
        raise
