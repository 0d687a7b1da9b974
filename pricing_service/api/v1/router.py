"""
Main API v1 router
Combines all handlers
"""
from fastapi import APIRouter

from pricing_service.api.v1.handlers import (
    bundle_handler,
    checkout_handler,
    currency_handler,
    health_handler,
    order_handler
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(bundle_handler.router)
api_router.include_router(order_handler.router)
api_router.include_router(checkout_handler.router)
api_router.include_router(currency_handler.router)
api_router.include_router(health_handler.router)
