"""API interfaces."""
from vidpub.interfaces.api.routers import thumbnails_router, videos_router

__all__ = [
    "thumbnails_router",
    "videos_router",
]
