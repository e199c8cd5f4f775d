# marketfresh/data/models/order_item.py
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship

from marketfresh.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True, index=True)
    product_id = Column(Uuid, ForeignKey("products.id"), primary_key=True)

    quantity = Column(Integer, nullable=False)
    unit_price_cents = Column(Integer, nullable=False)  # frozen at checkout

    order = relationship("OrderModel", back_populates="items")
    product = relationship("ProductModel")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
        CheckConstraint("unit_price_cents >= 0", name="ck_order_items_price"),
    )
