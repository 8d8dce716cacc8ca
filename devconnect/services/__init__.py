"""
Services for outbound integrations.
"""

from devconnect.services.github_service import GitHubService

__all__ = ["GitHubService"]
