# storefront/services/permission_service.py
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import PermissionDenied, StoreFailure
from storefront.repos.user_repo import SuperuserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AdminCheck(str, Enum):
    GRANTED = "granted"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


class PermissionService:
    """
    Superuser checks shared by every catalog mutation.

    check_superuser keeps the three outcomes apart; is_superuser collapses
    them to a bool for callers that only care about "yes".
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = SuperuserRepo(db)

    def check_superuser(self, user_id: str | None) -> AdminCheck:
        if not user_id:
            return AdminCheck.NOT_FOUND
        try:
            superuser = self.repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Superuser check failed for {user_id}: {e}")
            return AdminCheck.LOOKUP_FAILED

        if superuser is None:
            logger.warning(f"Superuser check failed: {user_id} not found")
            return AdminCheck.NOT_FOUND

        logger.info(f"Superuser verified: {user_id}")
        return AdminCheck.GRANTED

    def is_superuser(self, user_id: str | None) -> bool:
        return self.check_superuser(user_id) is AdminCheck.GRANTED

    def require_superuser(self, user_id: str | None, action: str) -> None:
        result = self.check_superuser(user_id)
        if result is AdminCheck.LOOKUP_FAILED:
            raise StoreFailure("Failed to verify superuser permissions.")
        if result is AdminCheck.NOT_FOUND:
            raise PermissionDenied(f"Only superusers are allowed to {action}.")
