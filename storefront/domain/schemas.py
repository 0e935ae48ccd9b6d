# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


# =====================================================
# CATALOG
# =====================================================
class CategoryOut(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class SizeOut(BaseModel):
    id: int
    size_name: str

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    price: Decimal
    is_discounted: bool
    discount_percentage: Optional[Decimal] = None
    images: List[str]
    stock_quantity: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryName(BaseModel):
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProductListOut(ProductOut):
    """Product with the names of the categories it is linked to."""

    category: List[CategoryName] = Field(default_factory=list, validation_alias="categories")


class ProductAddIn(BaseModel):
    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    is_discounted: bool = False
    discount_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    stock_quantity: int = Field(0, ge=0)
    category_ids: List[int] = Field(default_factory=list)
    size_ids: List[int] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list, description="Image URLs, 1 to 5")


class ProductUpdateIn(BaseModel):
    user_id: str = Field(..., min_length=1)
    product_id: int = Field(..., gt=0)
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    is_discounted: Optional[bool] = None
    discount_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    stock_quantity: Optional[int] = Field(None, ge=0)
    images: Optional[List[str]] = None
    category_ids: Optional[List[int]] = None
    size_ids: Optional[List[int]] = None


class ProductFetchIn(BaseModel):
    # kept loose: a non-numeric id is a 400 with its own message
    product_id: Optional[str | int] = None


class CategoryAddIn(BaseModel):
    user_id: Optional[str] = None
    name: Optional[str] = None


class SizeAddIn(BaseModel):
    user_id: Optional[str] = None
    size_name: Optional[str] = None


class CatalogDeleteIn(BaseModel):
    user_id: Optional[str] = None
    id: Optional[int] = None


class CategoryProductsIn(BaseModel):
    category_id: int = Field(..., gt=0)


class SizeProductsIn(BaseModel):
    size_id: int = Field(..., gt=0)


# =====================================================
# CART
# =====================================================
class CartAddIn(BaseModel):
    user_id: str = Field(..., min_length=1)
    product_id: int = Field(..., gt=0)
    size_id: Optional[int] = Field(None, gt=0)
    quantity: int = Field(1, gt=0, description="Quantity (must be > 0)")


class CartUserIn(BaseModel):
    user_id: str = Field(..., min_length=1)


class CartDeleteIn(BaseModel):
    user_id: str = Field(..., min_length=1)
    cart_item_id: int = Field(..., gt=0)


class CartProductOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    price: Decimal
    images: List[str]
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(BaseModel):
    id: int
    user_id: str
    product_id: int
    size_id: Optional[int] = None
    quantity: int
    added_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartLineDetailOut(CartLineOut):
    products: Optional[CartProductOut] = Field(None, validation_alias="product")
    sizes: Optional[SizeOut] = Field(None, validation_alias="size")


# =====================================================
# ORDERS
# =====================================================
class OrderItemIn(BaseModel):
    product_id: int = Field(..., gt=0)
    size_id: Optional[int] = Field(None, gt=0)
    quantity: int = Field(..., gt=0)


class OrderCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    items: List[OrderItemIn] = Field(..., min_length=1)


class OrderStatusIn(BaseModel):
    order_id: Optional[int] = None
    status: Optional[str] = None


class OrderUserIn(BaseModel):
    user_id: str = Field(..., min_length=1)


class OrderOut(BaseModel):
    id: int
    user_id: str
    order_status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    size_id: Optional[int] = None
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderLineOut(BaseModel):
    product_id: int
    quantity: int
    size_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class OrderWithItemsOut(OrderOut):
    orderitems: List[OrderLineOut] = Field(default_factory=list, validation_alias="items")


class MessageIn(BaseModel):
    orderId: int = Field(..., gt=0)
    sender: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class MessageFetchIn(BaseModel):
    order_id: int = Field(..., gt=0)


class MessageOut(BaseModel):
    id: int
    order_id: int
    sender: str
    message: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# REVIEWS
# =====================================================
class ReviewIn(BaseModel):
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    product_id: int = Field(..., gt=0)
    rating: float = Field(..., gt=0, le=5)
    feedback: str = Field(..., min_length=1)


class ReplyIn(BaseModel):
    review_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    reply: str = Field(..., min_length=1)


class ReplyOut(BaseModel):
    id: int
    review_id: int
    product_id: int
    user_id: str
    username: str
    reply: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewOut(BaseModel):
    id: int
    user_id: str
    product_id: int
    username: str
    rating: float
    feedback: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewWithRepliesOut(ReviewOut):
    replies: List[ReplyOut] = Field(default_factory=list)


# =====================================================
# USERS / AUTH
# =====================================================
class UserRead(BaseModel):
    id: str
    email: str
    username: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserInfoIn(BaseModel):
    user_id: str = Field(..., min_length=1)


class SignupIn(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    username: str = Field(..., min_length=1, max_length=100)


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class EmailIn(BaseModel):
    email: str = Field(..., min_length=3)


class ResetPasswordIn(BaseModel):
    email: str = Field(..., min_length=3)
    otp: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class VerifyEmailIn(BaseModel):
    email: str = Field(..., min_length=3)
    otp: str = Field(..., min_length=1)


class ResendOtpIn(BaseModel):
    email: Optional[str] = None
    purpose: Optional[str] = None


class AuthUserOut(BaseModel):
    id: str
    email: str
    username: Optional[str] = None
    is_superuser: Optional[bool] = None
