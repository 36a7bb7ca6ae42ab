from .auth import router as auth_router
from .posts import router as posts_router
from .comments import router as comments_router
from .admin_posts import router as admin_posts_router
from .health import router as health_router
from .sitemap import router as sitemap_router

__all__ = [
    "auth_router",
    "posts_router",
    "comments_router",
    "admin_posts_router",
    "health_router",
    "sitemap_router",
]
