"""
API endpoints.
"""
from fastapi import APIRouter

from app.api import notifications, push_tokens

# Главный роутер API
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(notifications.router)
api_router.include_router(push_tokens.router)

__all__ = ["api_router"]
