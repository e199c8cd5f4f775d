import uuid

import pytest

from marketfresh.data.models import CartModel, OrderModel, ProductModel
from marketfresh.domain.errors import Reason, ShopError
from marketfresh.repos.product_repo import ProductRepo
from marketfresh.services.cart_service import CartService
from marketfresh.services.order_service import OrderService

from tests.conftest import CUSTOMER, fixed_clock


@pytest.fixture()
def carts(db):
    return CartService(db, clock=fixed_clock)


@pytest.fixture()
def orders(db):
    return OrderService(db, clock=fixed_clock)


@pytest.fixture()
def filled_cart(carts, make_product):
    a = make_product(price_cents=250, stock_qty=10)
    b = make_product(type="meat", price_cents=890, stock_qty=5, cold_chain=(0, 4, 2))
    cart = carts.create_cart()
    carts.set_item(cart["id"], a.id, 2)
    carts.set_item(cart["id"], b.id, 1)
    return cart["id"], a, b


class TestCreateOrder:
    def test_checkout(self, db, carts, orders, filled_cart):
        cart_id, a, b = filled_cart

        order = orders.create_order(cart_id, CUSTOMER)

        assert order["status"] == "pending_payment"
        assert order["cart_id"] == cart_id
        assert order["total_cents"] == 1390
        assert order["customer"] == CUSTOMER
        lines = {i["product_id"]: i for i in order["items"]}
        assert lines[a.id]["unit_price_cents"] == 250
        assert lines[a.id]["line_total_cents"] == 500
        assert lines[b.id]["quantity"] == 1

        db.refresh(a)
        db.refresh(b)
        assert a.stock_qty == 8
        assert b.stock_qty == 4
        assert carts.get_cart(cart_id)["status"] == "checked_out"

    def test_second_checkout_fails(self, orders, filled_cart):
        cart_id, _, _ = filled_cart
        orders.create_order(cart_id, CUSTOMER)

        with pytest.raises(ShopError) as exc:
            orders.create_order(cart_id, CUSTOMER)

        assert exc.value.reason == Reason.CART_NOT_OPEN

    def test_unit_price_is_frozen(self, db, orders, filled_cart):
        cart_id, a, _ = filled_cart
        order = orders.create_order(cart_id, CUSTOMER)

        a.price_cents = 999
        db.commit()

        again = orders.get_order(order["id"])
        line = next(i for i in again["items"] if i["product_id"] == a.id)
        assert line["unit_price_cents"] == 250
        assert again["total_cents"] == 1390

    def test_phone_is_optional(self, orders, filled_cart):
        cart_id, _, _ = filled_cart
        customer = {k: v for k, v in CUSTOMER.items() if k != "phone"}

        order = orders.create_order(cart_id, customer)

        assert order["customer"]["phone"] is None

    def test_unknown_cart(self, orders):
        with pytest.raises(ShopError) as exc:
            orders.create_order(uuid.uuid4(), CUSTOMER)

        assert exc.value.reason == Reason.CART_NOT_FOUND

    def test_empty_cart(self, carts, orders):
        cart = carts.create_cart()

        with pytest.raises(ShopError) as exc:
            orders.create_order(cart["id"], CUSTOMER)

        assert exc.value.reason == Reason.CART_EMPTY

    def test_stock_dropped_since_item_was_added(self, db, carts, orders, filled_cart):
        cart_id, a, b = filled_cart
        a.stock_qty = 1
        db.commit()

        with pytest.raises(ShopError) as exc:
            orders.create_order(cart_id, CUSTOMER)

        assert exc.value.reason == Reason.INSUFFICIENT_STOCK
        db.refresh(b)
        assert b.stock_qty == 5
        assert carts.get_cart(cart_id)["status"] == "open"
        assert db.query(OrderModel).count() == 0

    def test_failed_decrement_rolls_everything_back(self, db, carts, orders, filled_cart, monkeypatch):
        cart_id, a, b = filled_cart
        real_decrement = ProductRepo.decrement_stock

        # first line decrements, the second loses a race
        def flaky_decrement(self, product_id, quantity):
            if product_id == b.id:
                return 0
            return real_decrement(self, product_id, quantity)

        monkeypatch.setattr(ProductRepo, "decrement_stock", flaky_decrement)

        with pytest.raises(ShopError) as exc:
            orders.create_order(cart_id, CUSTOMER)

        assert exc.value.reason == Reason.INSUFFICIENT_STOCK
        db.refresh(a)
        assert a.stock_qty == 10
        assert db.query(OrderModel).count() == 0
        assert db.get(CartModel, cart_id).status == "open"


class TestConcurrentCheckout:
    def test_losing_checkout_gets_cart_not_open(self, database, db, carts, filled_cart):
        cart_id, a, b = filled_cart
        other = database.session()
        try:
            # the second request has already read the open cart and its items
            late = OrderService(other, clock=fixed_clock)
            assert CartService(other, clock=fixed_clock).get_cart(cart_id)["status"] == "open"

            first = OrderService(db, clock=fixed_clock).create_order(cart_id, CUSTOMER)

            with pytest.raises(ShopError) as exc:
                late.create_order(cart_id, CUSTOMER)

            assert exc.value.reason == Reason.CART_NOT_OPEN
        finally:
            other.close()

        db.expire_all()
        assert [o.id for o in db.query(OrderModel).all()] == [first["id"]]
        assert db.get(ProductModel, a.id).stock_qty == 8
        assert db.get(ProductModel, b.id).stock_qty == 4
        assert carts.get_cart(cart_id)["status"] == "checked_out"


class TestConditionalDecrement:
    def test_never_goes_negative(self, db, make_product):
        product = make_product(stock_qty=2)
        repo = ProductRepo(db)

        assert repo.decrement_stock(product.id, 3) == 0
        assert repo.decrement_stock(product.id, 2) == 1
        db.commit()

        db.refresh(product)
        assert product.stock_qty == 0


class TestGetOrder:
    def test_unknown_order(self, orders):
        assert orders.get_order(uuid.uuid4()) is None

    def test_items_carry_live_product_info(self, orders, filled_cart):
        cart_id, a, _ = filled_cart
        order = orders.create_order(cart_id, CUSTOMER)

        fetched = orders.get_order(order["id"])

        line = next(i for i in fetched["items"] if i["product_id"] == a.id)
        assert line["product"]["name"] == a.name
        assert line["product"]["freshness_days"] == 0
