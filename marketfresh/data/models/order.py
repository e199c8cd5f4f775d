# marketfresh/data/models/order.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from marketfresh.data.database import Base

ORDER_PENDING_PAYMENT = "pending_payment"
ORDER_PAID = "paid"
ORDER_CANCELLED = "cancelled"  # reserved


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    cart_id = Column(Uuid, ForeignKey("carts.id"), nullable=False, unique=True)

    status = Column(String(20), nullable=False, default=ORDER_PENDING_PAYMENT)
    total_cents = Column(Integer, nullable=False)

    # customer snapshot, copied at checkout
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=True)
    delivery_address = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("status IN ('pending_payment','paid','cancelled')", name="ck_orders_status"),
        CheckConstraint("total_cents >= 0", name="ck_orders_total"),
    )
