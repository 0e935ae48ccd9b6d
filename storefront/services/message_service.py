from sqlalchemy.orm import Session

from storefront.data.models.order import MessageModel
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, NotFound
from storefront.repos.order_repo import OrderRepo, MessageRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class MessageService:
    """Message thread attached to an order (user or superuser side)."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MessageRepo(db)
        self.order_repo = OrderRepo(db)

    def send_message(self, order_id: int, sender: str, message: str) -> MessageModel:
        if not order_id or not sender or not message:
            raise InvalidInput("Order ID, sender, and message are required.")

        with store_errors(self.db, "send the message"):
            if self.order_repo.get_order(order_id) is None:
                raise NotFound("Order not found.")
            created = self.repo.add_message(
                MessageModel(order_id=order_id, sender=sender, message=message)
            )
            self.db.commit()

        logger.info(f"Message from {sender} on order {order_id}")
        return created

    def fetch_messages(self, order_id: int) -> list[MessageModel]:
        if not order_id:
            raise InvalidInput("Order ID is required.")

        with store_errors(self.db, "fetch messages"):
            messages = self.repo.list_for_order(order_id)

        if not messages:
            raise NotFound("No messages found for this order.")
        return messages
