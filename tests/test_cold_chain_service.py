import uuid

import pytest

from marketfresh.domain.errors import Reason, ShopError
from marketfresh.services.cart_service import CartService
from marketfresh.services.cold_chain_service import COLD_CHAIN_NOTE, ColdChainService

from tests.conftest import fixed_clock


def _cart_with(db, *products):
    carts = CartService(db, clock=fixed_clock)
    cart = carts.create_cart()
    for p in products:
        carts.set_item(cart["id"], p.id, 1)
    return cart["id"]


class TestColdChain:
    def test_tightest_bounds_win(self, db, make_product):
        steak = make_product(type="meat", cold_chain=(0, 4, 2))
        chicken = make_product(type="meat", cold_chain=(-2, 4, 4))
        carrots = make_product(type="veg")
        cart_id = _cart_with(db, steak, chicken, carrots)

        result = ColdChainService(db).compute_for_cart(cart_id)

        assert result == {
            "has_meat": True,
            "requirements": {
                "storage_min_c": 0,
                "storage_max_c": 4,
                "max_hours_outside": 2,
                "consistent": True,
                "note": COLD_CHAIN_NOTE,
            },
        }

    def test_no_meat(self, db, make_product):
        cart_id = _cart_with(db, make_product(type="veg"))

        result = ColdChainService(db).compute_for_cart(cart_id)

        assert result == {"has_meat": False, "requirements": None}

    def test_empty_cart(self, db):
        cart_id = _cart_with(db)

        assert ColdChainService(db).compute_for_cart(cart_id) == {"has_meat": False, "requirements": None}

    def test_conflicting_specs_are_returned(self, db, make_product):
        fish = make_product(type="meat", cold_chain=(-18, -12, 1))
        beef = make_product(type="meat", cold_chain=(0, 4, 2))
        cart_id = _cart_with(db, fish, beef)

        requirements = ColdChainService(db).compute_for_cart(cart_id)["requirements"]

        assert requirements["storage_min_c"] == 0
        assert requirements["storage_max_c"] == -12
        assert requirements["max_hours_outside"] == 1
        assert requirements["consistent"] is False

    def test_meat_without_cold_chain_row(self, db, make_product):
        cart_id = _cart_with(db, make_product(type="meat"))

        result = ColdChainService(db).compute_for_cart(cart_id)

        assert result == {"has_meat": True, "requirements": None}

    def test_unknown_cart(self, db):
        with pytest.raises(ShopError) as exc:
            ColdChainService(db).compute_for_cart(uuid.uuid4())

        assert exc.value.reason == Reason.CART_NOT_FOUND
