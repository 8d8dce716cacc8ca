"""
DevConnect core library.

Provides configuration, database management, models, repositories,
the GitHub lookup service and logging used by the HTTP backend.

Usage:
    from devconnect.config import get_settings
    from devconnect.db import Database
    from devconnect.models import User, Profile
    from devconnect.repositories import ProfileRepository
    from devconnect.logging import get_logger
"""

__version__ = "1.0.0"
