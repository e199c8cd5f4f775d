import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from marketfresh.data.database import Database, DatabaseNotInitialized
from marketfresh.data.models import CartItemModel, ProductModel
from marketfresh.data.seed import seed_if_empty
from marketfresh.services.product_service import ProductService

from tests.conftest import NOW, fixed_clock


class TestDatabaseLifecycle:
    def test_session_before_initialize_fails(self):
        database = Database("sqlite://")
        with pytest.raises(DatabaseNotInitialized):
            database.session()

    def test_session_after_dispose_fails(self, tmp_path):
        database = Database(f"sqlite:///{tmp_path / 'db.sqlite'}")
        database.initialize()
        database.dispose()
        with pytest.raises(DatabaseNotInitialized):
            database.session()

    def test_initialize_is_idempotent(self, tmp_path):
        database = Database(f"sqlite:///{tmp_path / 'db.sqlite'}")
        database.initialize()
        engine = database.engine
        database.initialize()
        assert database.engine is engine
        database.dispose()

    def test_in_memory_database(self):
        database = Database("sqlite://", seed=True)
        database.initialize()
        with database.session() as db:
            count = db.execute(select(func.count()).select_from(ProductModel)).scalar_one()
        assert count == 4
        database.dispose()

    def test_creates_missing_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "db.sqlite"
        database = Database(f"sqlite:///{path}")
        database.initialize()
        assert path.parent.is_dir()
        database.dispose()


class TestSeed:
    def test_seeds_empty_catalog_once(self, db):
        assert seed_if_empty(db, fixed_clock) is True
        assert seed_if_empty(db, fixed_clock) is False

        count = db.execute(select(func.count()).select_from(ProductModel)).scalar_one()
        assert count == 4

    def test_seeded_products(self, db):
        seed_if_empty(db, fixed_clock)
        svc = ProductService(db, clock=fixed_clock)

        veg = svc.list_products("veg")
        meat = svc.list_products("meat")
        assert {p["name"] for p in veg} == {"Carottes", "Tomates"}
        assert {p["name"] for p in meat} == {"Steak haché", "Escalopes de poulet"}
        assert {p["freshness_days"] for p in veg} == {2, 5}

        steak = next(p for p in meat if p["name"] == "Steak haché")
        assert steak["freshness_date"] == NOW.date()
        detail = svc.get_product(steak["id"])
        assert detail["cold_chain"] == {
            "required": True,
            "storage_min_c": 0,
            "storage_max_c": 4,
            "max_hours_outside": 2,
        }

    def test_foreign_keys_are_enforced(self, db):
        db.add(CartItemModel(cart_id=uuid.uuid4(), product_id=uuid.uuid4(), quantity=1))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()
