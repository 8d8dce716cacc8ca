"""
SQLAlchemy models for DevConnect.

Usage:
    from devconnect.models import User, Profile
"""

from .base import Base
from .profile import Profile
from .user import User

__all__ = [
    "Base",
    "User",
    "Profile",
]
