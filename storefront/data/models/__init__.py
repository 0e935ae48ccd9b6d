# import every model so SQLAlchemy registers it in Base.metadata

from storefront.data.models.user import UserModel, SuperuserModel
from storefront.data.models.catalog import (
    ProductModel,
    CategoryModel,
    SizeModel,
    ProductCategoryModel,
    ProductSizeModel,
)
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel, OrderItemModel, MessageModel
from storefront.data.models.review import ReviewModel, ReplyModel
from storefront.data.models.otp import OtpModel

__all__ = [
    "UserModel",
    "SuperuserModel",
    "ProductModel",
    "CategoryModel",
    "SizeModel",
    "ProductCategoryModel",
    "ProductSizeModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "MessageModel",
    "ReviewModel",
    "ReplyModel",
    "OtpModel",
]
