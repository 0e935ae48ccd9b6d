# storefront/services/info_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, NotFound
from storefront.repos.order_repo import OrderRepo, MessageRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InfoService:
    """
    Everything stored about one user in a single payload.
    Only the user lookup is mandatory; a failed secondary lookup
    is logged and reported as an empty list.
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepo(db)
        self.reviews = ReviewRepo(db)
        self.orders = OrderRepo(db)
        self.messages = MessageRepo(db)

    def detailed_info(self, user_id: str) -> dict:
        if not user_id:
            raise InvalidInput("User ID is required in the request body.")

        with store_errors(self.db, "fetch user data"):
            user = self.users.get_user(user_id)
        if user is None:
            raise NotFound("User not found in users table.")

        reviews = self._safe("reviews", lambda: self.reviews.list_by_user(user_id))
        replies = self._safe("replies", lambda: self.reviews.replies_by_user(user_id))
        orders = self._safe("orders", lambda: self.orders.list_by_user(user_id))
        order_ids = [o.id for o in orders]
        messages = self._safe("messages", lambda: self.messages.list_for_orders(order_ids))

        return {
            "user": user,
            "reviews": reviews,
            "replies": replies,
            "messages": messages,
            "orders": [{"id": oid} for oid in order_ids],
        }

    def _safe(self, what: str, fetch) -> list:
        try:
            return fetch()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error fetching {what}: {e}")
            return []
