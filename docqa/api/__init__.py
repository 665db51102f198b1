"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import hackrx_router, health_router, upload_router

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(hackrx_router)
api_router.include_router(upload_router)

__all__ = ["api_router"]
