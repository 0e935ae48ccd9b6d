# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_lock_service
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CartAddIn,
    CartUserIn,
    CartDeleteIn,
    CartLineOut,
    CartLineDetailOut,
    OrderOut,
    OrderItemOut,
)
from storefront.services.cart_service import CartService
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.post("/add", status_code=201)
def add_to_cart(payload: CartAddIn, db: Session = Depends(get_db)):
    svc = CartService(db)
    line = svc.add_product(
        user_id=payload.user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
        size_id=payload.size_id,
    )
    return {
        "message": "Product added to cart successfully!",
        "cart_item": CartLineOut.model_validate(line),
    }


@router.post("/fetch")
def fetch_cart(payload: CartUserIn, db: Session = Depends(get_db)):
    svc = CartService(db)
    lines = svc.fetch_cart(payload.user_id)
    return {
        "message": "Cart items fetched successfully!",
        "cart_items": [CartLineDetailOut.model_validate(line) for line in lines],
    }


@router.delete("/delete")
def delete_from_cart(payload: CartDeleteIn, db: Session = Depends(get_db)):
    svc = CartService(db)
    removed = svc.remove_line(payload.user_id, payload.cart_item_id)
    return {
        "message": "Product removed from cart successfully!",
        "deleted_item": CartLineOut.model_validate(removed),
    }


@router.post("/place-order", status_code=201)
def place_order(
    payload: CartUserIn,
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Turns the user's whole cart into one "Pending" order and empties the cart.
    """
    svc = OrderService(db, lock_service=lock_service)
    result = svc.place_order_from_cart(payload.user_id)
    return {
        "message": "Order placed successfully!",
        "order": OrderOut.model_validate(result["order"]),
        "order_items": [OrderItemOut.model_validate(i) for i in result["order_items"]],
    }
