"""Aggregate router exports."""
from .comments import router as comments_router
from .follows import router as follows_router
from .likes import router as likes_router
from .posts import router as posts_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "comments_router",
    "follows_router",
    "likes_router",
    "posts_router",
    "system_router",
    "users_router",
]
