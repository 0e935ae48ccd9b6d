# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    OrderCreate,
    OrderStatusIn,
    OrderUserIn,
    OrderOut,
    OrderItemOut,
    OrderWithItemsOut,
    MessageIn,
    MessageFetchIn,
    MessageOut,
)
from storefront.services.message_service import MessageService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
def create_order(payload: OrderCreate, svc: OrderService = Depends(get_service)):
    """
    Order from an explicit item list; does not touch the cart.
    """
    result = svc.create_order(payload.user_id, [i.model_dump() for i in payload.items])
    return {
        "message": "Order created successfully!",
        "order": OrderOut.model_validate(result["order"]),
        "items": [OrderItemOut.model_validate(i) for i in result["items"]],
    }


@router.put("/status")
def update_order_status(payload: OrderStatusIn, svc: OrderService = Depends(get_service)):
    order = svc.update_status(payload.order_id, payload.status)
    return {
        "message": f"Order status updated to '{payload.status}' successfully!",
        "order": OrderOut.model_validate(order),
    }


@router.post("/user/orders")
def user_orders(payload: OrderUserIn, svc: OrderService = Depends(get_service)):
    orders = svc.get_user_orders(payload.user_id)
    return [OrderWithItemsOut.model_validate(o) for o in orders]


@router.get("/all")
def all_orders(svc: OrderService = Depends(get_service)):
    orders = svc.get_all_orders()
    return {
        "message": "Orders fetched successfully!",
        "orders": [OrderWithItemsOut.model_validate(o) for o in orders],
    }


@router.post("/messages", status_code=201)
def send_message(payload: MessageIn, db: Session = Depends(get_db)):
    created = MessageService(db).send_message(payload.orderId, payload.sender, payload.message)
    return {
        "message": "Message sent successfully!",
        "messageData": [MessageOut.model_validate(created)],
    }


@router.post("/messages/fetch")
def fetch_messages(payload: MessageFetchIn, db: Session = Depends(get_db)):
    messages = MessageService(db).fetch_messages(payload.order_id)
    return [MessageOut.model_validate(m) for m in messages]
