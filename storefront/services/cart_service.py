from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, NotFound
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart lines per user.
    commands (add, delete) change state, query (fetch) only reads.
    Placing an order from the cart lives in OrderService.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)

    #query
    def fetch_cart(self, user_id: str) -> list[CartItemModel]:
        if not user_id:
            raise InvalidInput("User ID is required to fetch cart items.")

        with store_errors(self.db, "fetch cart items"):
            return self.repo.get_lines(user_id)

    #commands
    def add_product(
        self,
        user_id: str,
        product_id: int,
        quantity: int = 1,
        size_id: int | None = None,
    ) -> CartItemModel:
        if not user_id or not product_id or quantity is None or quantity <= 0:
            raise InvalidInput("User ID, Product ID, and valid quantity are required.")

        # duplicates are appended, not merged
        with store_errors(self.db, "add product to cart"):
            line = self.repo.add_line(
                CartItemModel(
                    user_id=user_id,
                    product_id=product_id,
                    size_id=size_id or None,
                    quantity=quantity,
                )
            )
            self.repo.commit()

        logger.info(f"Added product {product_id} (size {size_id}) x{quantity} to cart of {user_id}")
        return line

    def remove_line(self, user_id: str, cart_item_id: int) -> CartItemModel:
        if not user_id or not cart_item_id:
            raise InvalidInput(
                "User ID and Cart Item ID are required to delete a product from the cart."
            )

        with store_errors(self.db, "delete product from cart"):
            line = self.repo.get_line(cart_item_id, user_id)
            if line is None:
                raise NotFound("Cart item not found.")

            # snapshot before the row is gone
            snapshot = {
                "id": line.id,
                "user_id": line.user_id,
                "product_id": line.product_id,
                "size_id": line.size_id,
                "quantity": line.quantity,
                "added_at": line.added_at,
            }
            self.repo.delete_line(line)
            self.repo.commit()

        logger.info(f"Removed cart line {cart_item_id} of {user_id}")
        return CartItemModel(**snapshot)
