"""
Repository pattern implementations for data access.

Usage:
    from devconnect.repositories import ProfileRepository

    async with database.session() as session:
        repo = ProfileRepository(session)
        profile = await repo.get_by_user_id(user_id)
"""

from .base import BaseRepository, coerce_id
from .profile_repository import ProfileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "coerce_id",
    "ProfileRepository",
    "UserRepository",
]
