# marketfresh/repos/order_repo.py
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from marketfresh.data.models.order import OrderModel, ORDER_PAID, ORDER_PENDING_PAYMENT
from marketfresh.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # no commit, the checkout transaction owns it
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: UUID) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order_items(self, order_id: UUID) -> list[OrderItemModel]:
        stmt = (
            select(OrderItemModel)
            .options(joinedload(OrderItemModel.product))
            .where(OrderItemModel.order_id == order_id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def mark_paid(self, order_id: UUID) -> int:
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == ORDER_PENDING_PAYMENT)
            .values(status=ORDER_PAID)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
