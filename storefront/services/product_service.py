# storefront/services/product_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.catalog import ProductModel
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, NotFound
from storefront.repos.product_repo import ProductRepo
from storefront.services.permission_service import PermissionService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MAX_IMAGES = 5

_UPDATABLE = (
    "title",
    "description",
    "price",
    "is_discounted",
    "discount_percentage",
    "stock_quantity",
    "images",
)


class ProductService:
    def __init__(self, db: Session, permissions: PermissionService | None = None):
        self.db = db
        self.repo = ProductRepo(db)
        self.permissions = permissions or PermissionService(db)

    def add_product(
        self,
        user_id: str,
        title: str,
        price: Decimal,
        category_ids: list[int],
        images: list[str],
        size_ids: list[int] | None = None,
        description: str | None = None,
        is_discounted: bool = False,
        discount_percentage: Decimal | None = None,
        stock_quantity: int = 0,
    ) -> ProductModel:
        """
        Use Case: new product plus its category/size links.

        Images are URLs of already-stored files; at most five, at least one.
        """
        self.permissions.require_superuser(user_id, "add products")

        if not category_ids:
            raise InvalidInput("At least one category ID is required.")
        if len(images) > MAX_IMAGES:
            raise InvalidInput(f"You can upload a maximum of {MAX_IMAGES} images.")
        if not images:
            raise InvalidInput("At least one product image is required.")

        with store_errors(self.db, "add product to the database"):
            product = self.repo.add_product(
                ProductModel(
                    title=title,
                    description=description,
                    price=price,
                    is_discounted=is_discounted,
                    discount_percentage=discount_percentage,
                    images=list(images),
                    stock_quantity=stock_quantity or 0,
                )
            )
            self.repo.link_categories(product.id, category_ids)
            if size_ids:
                self.repo.link_sizes(product.id, size_ids)
            self.repo.commit()

        logger.info(
            f"Product {product.id} added by {user_id} "
            f"(categories {category_ids}, sizes {size_ids or []})"
        )
        return product

    def get_product(self, product_id) -> ProductModel:
        try:
            pid = int(product_id)
        except (TypeError, ValueError):
            raise InvalidInput("A valid product ID is required.")
        if pid <= 0:
            raise InvalidInput("A valid product ID is required.")

        with store_errors(self.db, "fetch product"):
            product = self.repo.get_product(pid)

        if product is None:
            raise NotFound("Product not found.")
        return product

    def update_product(
        self,
        user_id: str,
        product_id: int,
        fields: dict,
        category_ids: list[int] | None = None,
        size_ids: list[int] | None = None,
    ) -> ProductModel:
        if not user_id or not product_id:
            raise InvalidInput("User ID and Product ID are required to update a product.")

        self.permissions.require_superuser(user_id, "update products")

        changes = {k: v for k, v in fields.items() if k in _UPDATABLE and v is not None}

        with store_errors(self.db, "update product"):
            product = self.repo.get_product(product_id)
            if product is None:
                raise NotFound("Product not found.")

            if changes:
                self.repo.update_product(product, changes)
            if category_ids is not None:
                self.repo.replace_categories(product_id, category_ids)
            if size_ids is not None:
                self.repo.replace_sizes(product_id, size_ids)
            self.repo.commit()

        logger.info(f"Product {product_id} updated by {user_id}: {sorted(changes)}")
        return product

    def list_products(self) -> list[ProductModel]:
        with store_errors(self.db, "fetch products"):
            return self.repo.list_products()
