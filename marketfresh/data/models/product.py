# marketfresh/data/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from marketfresh.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    type = Column(String(10), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    price_cents = Column(Integer, nullable=False)
    unit = Column(String(50), nullable=False)
    origin = Column(String(255), nullable=False)
    freshness_date = Column(Date, nullable=False)  # harvest / cut date
    stock_qty = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    cold_chain = relationship(
        "ColdChainSpecModel",
        back_populates="product",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("type IN ('veg','meat')", name="ck_products_type"),
        CheckConstraint("price_cents >= 0", name="ck_products_price"),
        CheckConstraint("stock_qty >= 0", name="ck_products_stock"),
        Index("idx_products_type_active", "type", "is_active"),
    )
