# marketfresh/data/seed.py
from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from marketfresh.data.models import ColdChainSpecModel, ProductModel
from marketfresh.utils.dates import Clock, utc_now
from marketfresh.utils.logging import get_logger

logger = get_logger(__name__)


def demo_products(clock: Clock = utc_now) -> list[ProductModel]:
    today = clock().date()
    two_days_ago = today - timedelta(days=2)
    five_days_ago = today - timedelta(days=5)

    return [
        ProductModel(
            type="veg",
            name="Carottes",
            description="Carottes locales, croquantes.",
            price_cents=250,
            unit="kg",
            origin="Ferme des Prés - 32",
            freshness_date=two_days_ago,
            stock_qty=25,
        ),
        ProductModel(
            type="veg",
            name="Tomates",
            description="Tomates de saison.",
            price_cents=390,
            unit="kg",
            origin="Domaine du Soleil - 34",
            freshness_date=five_days_ago,
            stock_qty=18,
        ),
        ProductModel(
            type="meat",
            name="Steak haché",
            description="Bœuf - 2 x 125g",
            price_cents=650,
            unit="pack",
            origin="Élevage du Bocage - 49",
            freshness_date=today,
            stock_qty=40,
            cold_chain=ColdChainSpecModel(
                storage_min_c=0,
                storage_max_c=4,
                max_hours_outside_cold_chain=2,
            ),
        ),
        ProductModel(
            type="meat",
            name="Escalopes de poulet",
            description="Poulet - 500g",
            price_cents=890,
            unit="barquette",
            origin="Ferme des Volailles - 85",
            freshness_date=two_days_ago,
            stock_qty=22,
            cold_chain=ColdChainSpecModel(
                storage_min_c=0,
                storage_max_c=4,
                max_hours_outside_cold_chain=2,
            ),
        ),
    ]


def seed_if_empty(db: Session, clock: Clock = utc_now) -> bool:
    # only seed an empty catalog, never overwrite
    count = db.execute(select(func.count()).select_from(ProductModel)).scalar_one()
    if count > 0:
        return False

    products = demo_products(clock)
    try:
        db.add_all(products)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Seeded {len(products)} demo products")
    return True
