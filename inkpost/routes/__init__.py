from inkpost.routes.ai import router as ai_router
from inkpost.routes.auth import router as auth_router
from inkpost.routes.posts import router as posts_router

__all__ = ["ai_router", "auth_router", "posts_router"]
