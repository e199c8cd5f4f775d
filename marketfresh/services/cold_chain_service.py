# marketfresh/services/cold_chain_service.py
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.orm import Session

from marketfresh.domain.errors import CartError, Reason
from marketfresh.repos.cart_repo import CartRepo

COLD_CHAIN_NOTE = "Cold chain required (meat products)."


class ColdChainService:
    """
    Worst-case storage constraints for a cart: every meat item's constraints have
    to hold at the same time, so the tightest bound of each kind wins.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    def compute_for_cart(self, cart_id: UUID) -> Dict[str, Any]:
        if not self.repo.get_cart(cart_id):
            raise CartError(Reason.CART_NOT_FOUND)

        meat = [i.product for i in self.repo.get_cart_items(cart_id) if i.product.type == "meat"]
        if not meat:
            return {"has_meat": False, "requirements": None}

        specs = [p.cold_chain for p in meat if p.cold_chain is not None]
        if not specs:
            return {"has_meat": True, "requirements": None}

        storage_min_c = max(s.storage_min_c for s in specs)
        storage_max_c = min(s.storage_max_c for s in specs)
        max_hours = min(s.max_hours_outside_cold_chain for s in specs)

        # conflicting specs are reported, not rejected
        return {
            "has_meat": True,
            "requirements": {
                "storage_min_c": storage_min_c,
                "storage_max_c": storage_max_c,
                "max_hours_outside": max_hours,
                "consistent": storage_min_c <= storage_max_c,
                "note": COLD_CHAIN_NOTE,
            },
        }
