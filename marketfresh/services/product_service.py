# marketfresh/services/product_service.py
from datetime import datetime
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from marketfresh.data.models.product import ProductModel
from marketfresh.repos.product_repo import ProductRepo
from marketfresh.utils.dates import Clock, freshness_days, utc_now


def cold_chain_dict(product: ProductModel) -> Dict[str, Any] | None:
    spec = product.cold_chain
    if spec is None:
        return None
    return {
        "required": spec.cold_chain_required,
        "storage_min_c": spec.storage_min_c,
        "storage_max_c": spec.storage_max_c,
        "max_hours_outside": spec.max_hours_outside_cold_chain,
    }


def product_dict(product: ProductModel, now: datetime) -> Dict[str, Any]:
    return {
        "id": product.id,
        "type": product.type,
        "name": product.name,
        "description": product.description,
        "price_cents": product.price_cents,
        "unit": product.unit,
        "origin": product.origin,
        "freshness_date": product.freshness_date,
        "freshness_days": freshness_days(product.freshness_date, now),
        "stock_qty": product.stock_qty,
        "is_active": product.is_active,
    }


class ProductService:
    """
    Read-only catalog. Freshness age is derived from the injected clock,
    never stored.
    """

    def __init__(self, db: Session, clock: Clock = utc_now):
        self.repo = ProductRepo(db)
        self.clock = clock

    def list_products(self, product_type: str | None = None) -> List[Dict[str, Any]]:
        now = self.clock()
        return [product_dict(p, now) for p in self.repo.list_active(product_type)]

    def get_product(self, product_id: UUID) -> Dict[str, Any] | None:
        product = self.repo.get_active_product(product_id)
        if not product:
            return None

        data = product_dict(product, self.clock())
        if product.type == "meat":
            data["cold_chain"] = cold_chain_dict(product)
        return data
