"""API routers module."""

from .lessons import router as lessons_router
from .review import router as review_router

__all__ = [
    "lessons_router",
    "review_router",
]
