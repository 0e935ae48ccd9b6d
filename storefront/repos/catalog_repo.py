# storefront/repos/catalog_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.catalog import CategoryModel, SizeModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def add_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def list_categories(self) -> list[CategoryModel]:
        return list(
            self.db.execute(select(CategoryModel).order_by(CategoryModel.name.asc())).scalars().all()
        )

    def delete_category(self, category: CategoryModel) -> None:
        self.db.delete(category)
        self.db.commit()


class SizeRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_size(self, size_id: int) -> SizeModel | None:
        return self.db.get(SizeModel, size_id)

    def add_size(self, size: SizeModel) -> SizeModel:
        self.db.add(size)
        self.db.commit()
        self.db.refresh(size)
        return size

    def list_sizes(self) -> list[SizeModel]:
        return list(
            self.db.execute(select(SizeModel).order_by(SizeModel.size_name.asc())).scalars().all()
        )

    def delete_size(self, size: SizeModel) -> None:
        self.db.delete(size)
        self.db.commit()
