# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, OrderItemModel, MessageModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_items(self, items: list[OrderItemModel]) -> list[OrderItemModel]:
        self.db.add_all(items)
        self.db.flush()
        return items

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_items(self, order_id: int) -> list[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id)
            ).scalars().all()
        )

    def list_by_user(self, user_id: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.id)
            ).scalars().all()
        )

    def list_all(self) -> list[OrderModel]:
        return list(
            self.db.execute(select(OrderModel).order_by(OrderModel.id)).scalars().all()
        )

    def update_order_status(self, order_id: int, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.order_status = status
            self.db.flush()
        return order

    def commit(self):
        self.db.commit()


class MessageRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_message(self, message: MessageModel) -> MessageModel:
        self.db.add(message)
        self.db.flush()
        return message

    def list_for_order(self, order_id: int) -> list[MessageModel]:
        return list(
            self.db.execute(
                select(MessageModel)
                .where(MessageModel.order_id == order_id)
                .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
            ).scalars().all()
        )

    def list_for_orders(self, order_ids: list[int]) -> list[MessageModel]:
        if not order_ids:
            return []
        return list(
            self.db.execute(
                select(MessageModel)
                .where(MessageModel.order_id.in_(order_ids))
                .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
            ).scalars().all()
        )
