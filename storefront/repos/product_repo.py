# storefront/repos/product_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.catalog import (
    ProductModel,
    ProductCategoryModel,
    ProductSizeModel,
)


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def update_product(self, product: ProductModel, fields: dict) -> ProductModel:
        for key, value in fields.items():
            setattr(product, key, value)
        self.db.flush()
        return product

    def list_products(self) -> list[ProductModel]:
        return list(
            self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        )

    def list_by_category(self, category_id: int) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .join(ProductCategoryModel, ProductCategoryModel.product_id == ProductModel.id)
                .where(ProductCategoryModel.category_id == category_id)
                .order_by(ProductModel.id)
            ).scalars().all()
        )

    def list_by_size(self, size_id: int) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .join(ProductSizeModel, ProductSizeModel.product_id == ProductModel.id)
                .where(ProductSizeModel.size_id == size_id)
                .order_by(ProductModel.id)
            ).scalars().all()
        )

    def offers_size(self, product_id: int, size_id: int) -> bool:
        row = self.db.execute(
            select(ProductSizeModel.size_id).where(
                ProductSizeModel.product_id == product_id,
                ProductSizeModel.size_id == size_id,
            )
        ).first()
        return row is not None

    def link_categories(self, product_id: int, category_ids: list[int]) -> None:
        self.db.add_all(
            ProductCategoryModel(product_id=product_id, category_id=cid) for cid in category_ids
        )
        self.db.flush()

    def link_sizes(self, product_id: int, size_ids: list[int]) -> None:
        self.db.add_all(
            ProductSizeModel(product_id=product_id, size_id=sid) for sid in size_ids
        )
        self.db.flush()

    def replace_categories(self, product_id: int, category_ids: list[int]) -> None:
        self.db.execute(
            delete(ProductCategoryModel).where(ProductCategoryModel.product_id == product_id)
        )
        self.link_categories(product_id, category_ids)

    def replace_sizes(self, product_id: int, size_ids: list[int]) -> None:
        self.db.execute(
            delete(ProductSizeModel).where(ProductSizeModel.product_id == product_id)
        )
        self.link_sizes(product_id, size_ids)

    def refresh(self, product: ProductModel) -> ProductModel:
        self.db.refresh(product)
        return product

    def commit(self):
        self.db.commit()
