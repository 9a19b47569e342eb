from fastapi import APIRouter

from app.api.routers import health, premium

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(premium.router, prefix="/premium", tags=["premium"])
