from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from groundbook.core.exceptions import DomainException, PersistenceError
from groundbook.core.logging_config import get_logger

logger = get_logger()


def commit_or_raise(db: Session, on_integrity_error: DomainException | None = None):
    """
    Commit the session, rolling back on any database error.

    A unique-constraint violation is re-raised as ``on_integrity_error`` when
    given; everything else becomes a ``PersistenceError``.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if on_integrity_error is not None:
            raise on_integrity_error
        logger.error(f"Integrity error on commit: {e.orig}")
        raise PersistenceError(str(e.orig))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error on commit: {e}")
        raise PersistenceError(str(e))
