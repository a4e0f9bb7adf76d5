"""API routers."""
from vidpub.interfaces.api.routers.thumbnails import router as thumbnails_router
from vidpub.interfaces.api.routers.videos import router as videos_router

__all__ = [
    "thumbnails_router",
    "videos_router",
]
