# marketfresh/data/models/cart_item.py
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship

from marketfresh.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    cart_id = Column(Uuid, ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True, index=True)
    product_id = Column(Uuid, ForeignKey("products.id"), primary_key=True)

    quantity = Column(Integer, nullable=False)

    cart = relationship("CartModel", back_populates="items")
    product = relationship("ProductModel")

    __table_args__ = (CheckConstraint("quantity > 0", name="ck_cart_items_quantity"),)
