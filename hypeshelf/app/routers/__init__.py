from .recommendations import router as recommendation_router
from .users import router as user_router
from .images import router as image_router

__all__ = [
    "recommendation_router",
    "user_router",
    "image_router",
]
