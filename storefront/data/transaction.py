# storefront/data/transaction.py
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import StoreFailure
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def store_errors(db: Session, action: str):
    """
    Rolls the session back on any error raised inside the block.

    Driver errors become StoreFailure("Failed to <action>."); the driver
    message goes to the log only. Domain errors pass through unchanged.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Store error while trying to {action}: {e}")
        raise StoreFailure(f"Failed to {action}.") from e
    except Exception:
        db.rollback()
        raise
