from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from marketfresh.data.database import Database
from marketfresh.data.models import ColdChainSpecModel, ProductModel
from marketfresh.main import create_app

NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)

CUSTOMER = {
    "name": "Jeanne Martin",
    "email": "jeanne@marche.fr",
    "phone": "0601020304",
    "delivery_address": "12 rue des Halles, 75001 Paris",
}


def fixed_clock():
    return NOW


@pytest.fixture()
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'marketfresh.sqlite'}")
    database.initialize()
    yield database
    database.dispose()


@pytest.fixture()
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture()
def make_product(db):
    """Factory: inserts a product, created_at increases with every call."""
    counter = iter(range(1, 100_000))

    def _make(
        type="veg",
        name=None,
        price_cents=250,
        stock_qty=10,
        freshness_date=None,
        is_active=True,
        cold_chain=None,
    ):
        n = next(counter)
        product = ProductModel(
            type=type,
            name=name or f"Product {n}",
            description=f"Test product {n}",
            price_cents=price_cents,
            unit="kg",
            origin="Ferme de test - 00",
            freshness_date=freshness_date or NOW.date(),
            stock_qty=stock_qty,
            is_active=is_active,
            created_at=NOW + timedelta(seconds=n),
        )
        if cold_chain is not None:
            storage_min_c, storage_max_c, hours = cold_chain
            product.cold_chain = ColdChainSpecModel(
                storage_min_c=storage_min_c,
                storage_max_c=storage_max_c,
                max_hours_outside_cold_chain=hours,
            )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture()
def client(database):
    app = create_app(database)
    with TestClient(app) as c:
        yield c
