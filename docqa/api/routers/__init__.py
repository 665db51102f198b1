"""API routers."""

from .hackrx import router as hackrx_router
from .health import router as health_router
from .upload import router as upload_router

__all__ = [
    "hackrx_router",
    "health_router",
    "upload_router",
]
