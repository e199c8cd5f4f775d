# marketfresh/services/order_service.py
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.orm import Session

from marketfresh.data.models.cart import CART_OPEN
from marketfresh.data.models.order import OrderModel, ORDER_PENDING_PAYMENT
from marketfresh.data.models.order_item import OrderItemModel
from marketfresh.domain.errors import OrderError, Reason
from marketfresh.repos.cart_repo import CartRepo
from marketfresh.repos.order_repo import OrderRepo
from marketfresh.repos.product_repo import ProductRepo
from marketfresh.utils.dates import Clock, freshness_days, utc_now
from marketfresh.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order domain, kept apart from CartService.
    Checkout turns an open cart into an immutable order in one transaction.
    """

    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.clock = clock

    def create_order(self, cart_id: UUID, customer: Dict[str, Any]) -> Dict[str, Any]:
        """
        Use Case: checkout.

        1. Cart exists, is open and not empty
        2. Stock is re-checked for every line (it may have dropped since the item was added)
        3. Order + items (unit price frozen), stock decrements and the cart flip
           are written in one transaction, nothing is written on failure
        """
        cart = self.carts.get_cart(cart_id)

        if not cart:
            raise OrderError(Reason.CART_NOT_FOUND)

        if cart.status != CART_OPEN:
            raise OrderError(Reason.CART_NOT_OPEN)

        items = self.carts.get_cart_items(cart_id)
        if not items:
            raise OrderError(Reason.CART_EMPTY)

        for i in items:
            if i.quantity > i.product.stock_qty:
                logger.info(
                    f"Checkout of cart {cart_id} refused: {i.quantity} x {i.product_id}, "
                    f"stock {i.product.stock_qty}"
                )
                raise OrderError(Reason.INSUFFICIENT_STOCK)

        order = OrderModel(
            cart_id=cart_id,
            status=ORDER_PENDING_PAYMENT,
            total_cents=sum(i.product.price_cents * i.quantity for i in items),
            customer_name=customer["name"],
            customer_email=customer["email"],
            customer_phone=customer.get("phone"),
            delivery_address=customer["delivery_address"],
            items=[
                OrderItemModel(
                    product_id=i.product_id,
                    quantity=i.quantity,
                    unit_price_cents=i.product.price_cents,
                )
                for i in items
            ],
        )

        try:
            # the conditional cart flip goes first, it orders concurrent checkouts of one cart
            if self.carts.mark_checked_out(cart_id) == 0:
                raise OrderError(Reason.CART_NOT_OPEN)

            self.repo.add_order(order)

            # conditional decrement, closes the gap between the check above and the write
            for i in items:
                if self.products.decrement_stock(i.product_id, i.quantity) == 0:
                    raise OrderError(Reason.INSUFFICIENT_STOCK)

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order.id} created from cart {cart_id}, total {order.total_cents}")

        return self.get_order(order.id)

    def get_order(self, order_id: UUID) -> Dict[str, Any] | None:
        """
        Use Case: read an order (Query).
        Prices come from the frozen order lines, product info is live.
        """
        order = self.repo.get_order(order_id)

        if not order:
            return None

        now = self.clock()
        items = []
        for i in self.repo.get_order_items(order_id):
            p = i.product
            items.append(
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "unit_price_cents": i.unit_price_cents,
                    "product": {
                        "id": p.id,
                        "type": p.type,
                        "name": p.name,
                        "unit": p.unit,
                        "origin": p.origin,
                        "freshness_date": p.freshness_date,
                        "freshness_days": freshness_days(p.freshness_date, now),
                    },
                    "line_total_cents": i.unit_price_cents * i.quantity,
                }
            )

        return {
            "id": order.id,
            "cart_id": order.cart_id,
            "status": order.status,
            "total_cents": order.total_cents,
            "customer": {
                "name": order.customer_name,
                "email": order.customer_email,
                "phone": order.customer_phone,
                "delivery_address": order.delivery_address,
            },
            "items": items,
            "created_at": order.created_at,
        }
