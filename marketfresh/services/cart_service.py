# marketfresh/services/cart_service.py
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.orm import Session

from marketfresh.data.models.cart import CartModel, CART_OPEN
from marketfresh.domain.errors import CartError, Reason
from marketfresh.repos.cart_repo import CartRepo
from marketfresh.repos.product_repo import ProductRepo
from marketfresh.utils.dates import Clock, freshness_days, utc_now
from marketfresh.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases for the cart domain.
    Commands (create, set_item, remove_item) change state,
    the query (get_cart) only reads.
    """

    def __init__(self, db: Session, clock: Clock = utc_now):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.clock = clock

    #query
    def get_cart(self, cart_id: UUID) -> Dict[str, Any] | None:
        """
        Use Case: read a cart.
        Items are priced from live product data, the total is never stored.
        """
        cart = self.repo.get_cart(cart_id)

        if not cart:
            return None

        now = self.clock()
        items = []
        for i in self.repo.get_cart_items(cart_id):
            p = i.product
            items.append(
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "product": {
                        "id": p.id,
                        "type": p.type,
                        "name": p.name,
                        "price_cents": p.price_cents,
                        "unit": p.unit,
                        "origin": p.origin,
                        "freshness_date": p.freshness_date,
                        "freshness_days": freshness_days(p.freshness_date, now),
                    },
                    "line_total_cents": p.price_cents * i.quantity,
                }
            )

        return {
            "id": cart.id,
            "status": cart.status,
            "created_at": cart.created_at,
            "items": items,
            "total_cents": sum(i["line_total_cents"] for i in items),
        }

    #commands
    def create_cart(self) -> Dict[str, Any]:
        created = self.repo.create_cart(CartModel(status=CART_OPEN))

        logger.info(f"Created cart {created.id}")

        return self.get_cart(created.id)

    def _require_open_cart(self, cart_id: UUID) -> CartModel:
        cart = self.repo.get_cart(cart_id)

        if not cart:
            raise CartError(Reason.CART_NOT_FOUND)

        if cart.status != CART_OPEN:
            raise CartError(Reason.CART_NOT_OPEN)

        return cart

    def set_item(self, cart_id: UUID, product_id: UUID, quantity: int) -> Dict[str, Any]:
        """
        Use Case: set a product quantity in the cart (Command).

        Validation:
        - cart exists and is open
        - product exists and is active
        - quantity <= current stock (checked, not reserved)

        A second call for the same product replaces the quantity.
        """
        self._require_open_cart(cart_id)

        product = self.products.get_product(product_id)
        if not product or not product.is_active:
            raise CartError(Reason.PRODUCT_NOT_FOUND)

        if quantity > product.stock_qty:
            logger.info(
                f"Cart {cart_id}: {quantity} x {product_id} requested, "
                f"only {product.stock_qty} in stock"
            )
            raise CartError(Reason.INSUFFICIENT_STOCK)

        try:
            self.repo.set_cart_item(cart_id, product_id, quantity)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Cart {cart_id}: set {product_id} quantity to {quantity}")

        return self.get_cart(cart_id)

    def remove_item(self, cart_id: UUID, product_id: UUID) -> Dict[str, Any]:
        """
        Use Case: remove a product from the cart (Command).
        Removing a product that is not in the cart is a no-op.
        """
        self._require_open_cart(cart_id)

        try:
            removed = self.repo.delete_cart_item(cart_id, product_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        if removed:
            logger.info(f"Cart {cart_id}: removed {product_id}")

        return self.get_cart(cart_id)
