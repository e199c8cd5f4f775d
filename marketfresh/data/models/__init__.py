#import all models so SQLAlchemy registers them in Base.metadata

from marketfresh.data.models.product import ProductModel
from marketfresh.data.models.cold_chain import ColdChainSpecModel
from marketfresh.data.models.cart import CartModel
from marketfresh.data.models.cart_item import CartItemModel
from marketfresh.data.models.order import OrderModel
from marketfresh.data.models.order_item import OrderItemModel
from marketfresh.data.models.payment_intent import PaymentIntentModel

__all__ = [
    "ProductModel",
    "ColdChainSpecModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "PaymentIntentModel",
]
