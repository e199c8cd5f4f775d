# marketfresh/api/routers/products.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketfresh.data.database import get_db
from marketfresh.domain.errors import Reason, ShopError
from marketfresh.domain.schemas import ProductEnvelope, ProductListEnvelope, ProductType
from marketfresh.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=ProductListEnvelope)
def list_products(
    type: Optional[ProductType] = Query(None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return {"products": svc.list_products(type.value if type else None)}


@router.get("/{product_id}", response_model=ProductEnvelope)
def get_product(product_id: UUID, db: Session = Depends(get_db)):
    svc = get_service(db)
    product = svc.get_product(product_id)
    if not product:
        raise ShopError(Reason.PRODUCT_NOT_FOUND)
    return {"product": product}
