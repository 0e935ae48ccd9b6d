from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductCategoryModel(Base):
    __tablename__ = "product_categories"

    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True)


class ProductSizeModel(Base):
    __tablename__ = "product_sizes"

    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    size_id = Column(Integer, ForeignKey("sizes.id", ondelete="CASCADE"), primary_key=True)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    is_discounted = Column(Boolean, nullable=False, default=False)
    discount_percentage = Column(Numeric(5, 2), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    categories = relationship(
        "CategoryModel",
        secondary="product_categories",
        lazy="selectin",
        viewonly=True,
    )
    sizes = relationship(
        "SizeModel",
        secondary="product_sizes",
        lazy="selectin",
        viewonly=True,
    )


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)


class SizeModel(Base):
    __tablename__ = "sizes"

    id = Column(Integer, primary_key=True)
    size_name = Column(String, nullable=False, unique=True)
