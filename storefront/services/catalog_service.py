# storefront/services/catalog_service.py
from sqlalchemy.orm import Session

from storefront.data.models.catalog import CategoryModel, SizeModel, ProductModel
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, NotFound
from storefront.repos.catalog_repo import CategoryRepo, SizeRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.permission_service import PermissionService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, db: Session, permissions: PermissionService | None = None):
        self.db = db
        self.repo = CategoryRepo(db)
        self.product_repo = ProductRepo(db)
        self.permissions = permissions or PermissionService(db)

    def add_category(self, user_id: str | None, name: str | None) -> CategoryModel:
        if not user_id:
            raise InvalidInput("User ID is required.")
        self.permissions.require_superuser(user_id, "add categories")

        trimmed = (name or "").strip()
        if not trimmed:
            raise InvalidInput("Category name is required.")

        with store_errors(self.db, "add category"):
            category = self.repo.add_category(CategoryModel(name=trimmed))

        logger.info(f"Category {category.id} ({trimmed}) added by {user_id}")
        return category

    def list_categories(self) -> list[CategoryModel]:
        with store_errors(self.db, "fetch categories"):
            return self.repo.list_categories()

    def products_in_category(self, category_id: int) -> list[ProductModel]:
        if not category_id:
            raise InvalidInput("Category ID is required.")

        with store_errors(self.db, "fetch products for the given category"):
            products = self.product_repo.list_by_category(category_id)

        if not products:
            raise NotFound("No products found for the given category.")
        return products

    def delete_category(self, user_id: str | None, category_id: int | None) -> None:
        if not user_id:
            raise InvalidInput("User ID is required.")
        if not category_id:
            raise InvalidInput("Category ID is required.")
        self.permissions.require_superuser(user_id, "delete categories")

        with store_errors(self.db, "delete category"):
            category = self.repo.get_category(category_id)
            if category is None:
                raise NotFound("Category not found.")
            self.repo.delete_category(category)

        logger.info(f"Category {category_id} deleted by {user_id}")


class SizeService:
    def __init__(self, db: Session, permissions: PermissionService | None = None):
        self.db = db
        self.repo = SizeRepo(db)
        self.product_repo = ProductRepo(db)
        self.permissions = permissions or PermissionService(db)

    def add_size(self, user_id: str | None, size_name: str | None) -> SizeModel:
        if not user_id:
            raise InvalidInput("User ID is required.")
        self.permissions.require_superuser(user_id, "add sizes")

        trimmed = (size_name or "").strip()
        if not trimmed:
            raise InvalidInput("Size name is required.")

        with store_errors(self.db, "add size"):
            size = self.repo.add_size(SizeModel(size_name=trimmed))

        logger.info(f"Size {size.id} ({trimmed}) added by {user_id}")
        return size

    def list_sizes(self) -> list[SizeModel]:
        with store_errors(self.db, "fetch sizes"):
            return self.repo.list_sizes()

    def products_with_size(self, size_id: int) -> list[ProductModel]:
        if not size_id:
            raise InvalidInput("Size ID is required.")

        with store_errors(self.db, "fetch products for the given size"):
            products = self.product_repo.list_by_size(size_id)

        if not products:
            raise NotFound("No products found for the given size.")
        return products

    def delete_size(self, user_id: str | None, size_id: int | None) -> None:
        if not user_id:
            raise InvalidInput("User ID is required.")
        if not size_id:
            raise InvalidInput("Size ID is required.")
        self.permissions.require_superuser(user_id, "delete sizes")

        with store_errors(self.db, "delete size"):
            size = self.repo.get_size(size_id)
            if size is None:
                raise NotFound("Size not found.")
            self.repo.delete_size(size)

        logger.info(f"Size {size_id} deleted by {user_id}")
