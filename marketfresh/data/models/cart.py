# marketfresh/data/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, String, Uuid
from sqlalchemy.orm import relationship

from marketfresh.data.database import Base

CART_OPEN = "open"
CART_CHECKED_OUT = "checked_out"
CART_CANCELLED = "cancelled"  # reserved, nothing sets it yet


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    status = Column(String(20), nullable=False, default=CART_OPEN)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("status IN ('open','checked_out','cancelled')", name="ck_carts_status"),
    )
