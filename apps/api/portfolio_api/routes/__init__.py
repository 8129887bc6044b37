"""Route modules."""

from .admin import router as admin_router
from .blog import router as blog_router
from .experiences import router as experiences_router
from .messages import router as messages_router
from .projects import router as projects_router
from .skills import router as skills_router

__all__ = [
    "admin_router",
    "blog_router",
    "experiences_router",
    "messages_router",
    "projects_router",
    "skills_router",
]
