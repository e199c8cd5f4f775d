# marketfresh/repos/cart_repo.py
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, joinedload

from marketfresh.data.models.cart import CartModel, CART_CHECKED_OUT, CART_OPEN
from marketfresh.data.models.cart_item import CartItemModel
from marketfresh.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_cart(self, cart_id: UUID) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_items(self, cart_id: UUID) -> list[CartItemModel]:
        # live product data joined at read time, newest products first
        stmt = (
            select(CartItemModel)
            .join(ProductModel, ProductModel.id == CartItemModel.product_id)
            .options(joinedload(CartItemModel.product).selectinload(ProductModel.cold_chain))
            .where(CartItemModel.cart_id == cart_id)
            .order_by(ProductModel.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_cart_item(self, cart_id: UUID, product_id: UUID) -> CartItemModel | None:
        return self.db.get(CartItemModel, (cart_id, product_id))

    def set_cart_item(self, cart_id: UUID, product_id: UUID, quantity: int) -> CartItemModel:
        item = self.get_cart_item(cart_id, product_id)
        if item:
            item.quantity = quantity
        else:
            item = CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity)
            self.db.add(item)
        return item

    def delete_cart_item(self, cart_id: UUID, product_id: UUID) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.product_id == product_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def mark_checked_out(self, cart_id: UUID) -> int:
        # conditional on status, 0 rows means another checkout got there first
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.status == CART_OPEN)
            .values(status=CART_CHECKED_OUT)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
