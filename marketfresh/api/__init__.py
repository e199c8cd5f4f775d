# marketfresh/api/__init__.py
from fastapi import APIRouter

from marketfresh.api.routers import carts, meat, orders, payments, products

api_router = APIRouter(prefix="/api")
api_router.include_router(products.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
api_router.include_router(payments.router)
api_router.include_router(meat.router)
