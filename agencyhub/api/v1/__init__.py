from fastapi import APIRouter

from .endpoints import dashboard, financial, products, health

api_router = APIRouter()

api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(financial.router, prefix="/financial", tags=["financial"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
