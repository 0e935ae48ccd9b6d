# storefront/services/order_service.py
from datetime import datetime, timezone
from uuid import uuid4

from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, OrderItemModel, ORDER_PENDING
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, NotFound, Conflict, ExternalServiceError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService
from storefront.utils.settings import PLACE_ORDER_LOCK_TTL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Orders: placement from the cart, placement from an explicit item list,
    status updates and listings.
    """

    def __init__(self, db: Session, lock_service: LockService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.lock_service = lock_service

    def place_order_from_cart(self, user_id: str) -> dict:
        """
        Use Case: turn the user's cart into an order.

        1. reads the cart (empty -> InvalidInput, nothing written)
        2. creates the order with status "Pending"
        3. copies every cart line 1:1 into an order item
        4. clears the cart

        Steps 2-4 share one transaction, so a failure anywhere leaves
        neither an orphan order nor a half-cleared cart. Concurrent calls for
        the same user are serialized by a Redis lock.
        """
        if not user_id:
            raise InvalidInput("User ID is required to place an order.")

        token = uuid4().hex
        self._acquire(user_id, token)
        try:
            return self._place_order(user_id)
        finally:
            self._release(user_id, token)

    def _acquire(self, user_id: str, token: str) -> None:
        if self.lock_service is None:
            return
        try:
            locked = self.lock_service.acquire_place_order_lock(
                user_id=user_id,
                token=token,
                ttl=PLACE_ORDER_LOCK_TTL,
            )
        except RedisError as e:
            logger.error(f"Could not take the placement lock for {user_id}: {e}")
            raise ExternalServiceError("Failed to place the order.") from e

        if not locked:
            raise Conflict("An order for this cart is already being placed.")

    def _release(self, user_id: str, token: str) -> None:
        if self.lock_service is None:
            return
        try:
            self.lock_service.release_place_order_lock(user_id, token)
        except RedisError as e:
            # the key expires on its own
            logger.warning(f"Failed to release placement lock for {user_id}: {e}")

    def _place_order(self, user_id: str) -> dict:
        with store_errors(self.db, "place the order"):
            lines = self.cart_repo.get_lines(user_id)
            if not lines:
                raise InvalidInput("No items in the cart to place an order.")

            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    order_status=ORDER_PENDING,
                    created_at=datetime.now(timezone.utc),
                )
            )

            # verbatim copy, no stock or size re-validation
            items = self.repo.add_items(
                [
                    OrderItemModel(
                        order_id=order.id,
                        product_id=line.product_id,
                        size_id=line.size_id,
                        quantity=line.quantity,
                    )
                    for line in lines
                ]
            )

            cleared = self.cart_repo.clear(user_id, [line.id for line in lines])
            self.repo.commit()

        logger.info(
            f"Order {order.id} placed for {user_id}: {len(items)} items, {cleared} cart lines cleared"
        )
        return {"order": order, "order_items": items}

    def create_order(self, user_id: str, items: list[dict]) -> dict:
        """
        Use Case: order from an explicit item list.

        Every product and size reference is checked before anything is written.
        """
        if not user_id or not items:
            raise InvalidInput("User ID and at least one item are required to create an order.")

        with store_errors(self.db, "create the order"):
            for item in items:
                product_id = item.get("product_id")
                quantity = item.get("quantity")
                size_id = item.get("size_id")

                if not product_id or not quantity or quantity <= 0:
                    raise InvalidInput("Each item must have a valid product_id and quantity.")

                if self.product_repo.get_product(product_id) is None:
                    raise NotFound(f"Product with ID {product_id} not found.")

                if size_id and not self.product_repo.offers_size(product_id, size_id):
                    raise InvalidInput(f"Invalid size ID {size_id} for product {product_id}.")

            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    order_status=ORDER_PENDING,
                    created_at=datetime.now(timezone.utc),
                )
            )
            created_items = self.repo.add_items(
                [
                    OrderItemModel(
                        order_id=order.id,
                        product_id=item["product_id"],
                        size_id=item.get("size_id") or None,
                        quantity=item["quantity"],
                    )
                    for item in items
                ]
            )
            self.repo.commit()

        logger.info(f"Order {order.id} created for {user_id} with {len(created_items)} items")
        return {"order": order, "items": created_items}

    def update_status(self, order_id: int | None, status: str | None) -> OrderModel:
        if not order_id:
            raise InvalidInput("Order ID is required.")
        if not status:
            raise InvalidInput("Order status is required.")

        with store_errors(self.db, "update order status"):
            order = self.repo.update_order_status(order_id, status)
            if order is None:
                raise NotFound("Order not found.")
            self.repo.commit()

        logger.info(f"Order {order_id} status set to {status!r}")
        return order

    def get_user_orders(self, user_id: str) -> list[OrderModel]:
        if not user_id:
            raise InvalidInput("User ID is required.")

        with store_errors(self.db, "fetch orders for the user"):
            orders = self.repo.list_by_user(user_id)

        if not orders:
            raise NotFound("No orders found for this user.")
        return orders

    def get_all_orders(self) -> list[OrderModel]:
        with store_errors(self.db, "fetch all orders"):
            orders = self.repo.list_all()

        if not orders:
            raise NotFound("No orders found in the database.")
        return orders
