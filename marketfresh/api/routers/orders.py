# marketfresh/api/routers/orders.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketfresh.data.database import get_db
from marketfresh.domain.errors import Reason, ShopError
from marketfresh.domain.schemas import OrderCreate, OrderEnvelope
from marketfresh.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrderEnvelope, status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    """
    Checks out an open cart into an order awaiting payment.
    """
    svc = get_service(db)
    return {"order": svc.create_order(payload.cart_id, payload.customer.model_dump())}


@router.get("/{order_id}", response_model=OrderEnvelope)
def get_order(order_id: UUID, db: Session = Depends(get_db)):
    svc = get_service(db)
    order = svc.get_order(order_id)
    if not order:
        raise ShopError(Reason.ORDER_NOT_FOUND)
    return {"order": order}
