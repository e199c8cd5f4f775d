# marketfresh/api/routers/meat.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketfresh.data.database import get_db
from marketfresh.domain.schemas import ColdChainOut
from marketfresh.services.cold_chain_service import ColdChainService

router = APIRouter(prefix="/meat", tags=["meat"])


@router.get("/cold-chain/{cart_id}", response_model=ColdChainOut)
def cold_chain_for_cart(cart_id: UUID, db: Session = Depends(get_db)):
    return ColdChainService(db).compute_for_cart(cart_id)
