# marketfresh/api/routers/payments.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketfresh.data.database import get_db
from marketfresh.domain.schemas import OrderEnvelope, PaymentConfirm, PaymentIntentCreate, PaymentIntentOut
from marketfresh.services.order_service import OrderService
from marketfresh.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


def get_service(db: Session):
    return PaymentService(db)


@router.post("/intent", response_model=PaymentIntentOut, status_code=201)
def create_intent(payload: PaymentIntentCreate, db: Session = Depends(get_db)):
    svc = get_service(db)
    return svc.create_intent(payload.order_id)


@router.post("/confirm", response_model=OrderEnvelope)
def confirm_intent(payload: PaymentConfirm, db: Session = Depends(get_db)):
    """
    Mock confirmation: the intent succeeds and its order is marked paid.
    """
    svc = get_service(db)
    order_id = svc.confirm_intent(payload.payment_intent_id)
    return {"order": OrderService(db).get_order(order_id)}
