# marketfresh/api/routers/carts.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketfresh.data.database import get_db
from marketfresh.domain.errors import Reason, ShopError
from marketfresh.domain.schemas import CartCreatedOut, CartEnvelope, ItemIn
from marketfresh.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session):
    return CartService(db)


@router.post("", response_model=CartCreatedOut, status_code=201)
def create_cart(db: Session = Depends(get_db)):
    svc = get_service(db)
    return {"cart_id": svc.create_cart()["id"]}


@router.get("/{cart_id}", response_model=CartEnvelope)
def get_cart(cart_id: UUID, db: Session = Depends(get_db)):
    svc = get_service(db)
    cart = svc.get_cart(cart_id)
    if not cart:
        raise ShopError(Reason.CART_NOT_FOUND)
    return {"cart": cart}


@router.put("/{cart_id}/items", response_model=CartEnvelope)
def set_item(cart_id: UUID, payload: ItemIn, db: Session = Depends(get_db)):
    """
    Sets (replaces) the quantity of one product in the cart.
    """
    svc = get_service(db)
    return {"cart": svc.set_item(cart_id, payload.product_id, payload.quantity)}


@router.delete("/{cart_id}/items/{product_id}", response_model=CartEnvelope)
def remove_item(cart_id: UUID, product_id: UUID, db: Session = Depends(get_db)):
    svc = get_service(db)
    return {"cart": svc.remove_item(cart_id, product_id)}
