"""API routers."""

from .health import router as health_router
from .progress_stream import router as progress_stream_router
from .uploads import router as uploads_router

__all__ = [
    "health_router",
    "progress_stream_router",
    "uploads_router",
]
