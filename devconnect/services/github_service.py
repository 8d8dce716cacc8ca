"""
GitHub repository lookup.

Fetches the most recently created public repositories for a username.
The client is built once from settings and closed on application shutdown.
"""

from typing import Any
from urllib.parse import quote

import httpx

from devconnect.config import Settings
from devconnect.errors import NotFound, ServerError
from devconnect.logging import get_logger

logger = get_logger("github")

REPO_LIMIT = 5
USER_AGENT = "DevConnect/1.0"


class GitHubService:
    """
    Async wrapper around GitHub's ``/users/{username}/repos`` endpoint.

    Usage:
        service = GitHubService(settings)
        repos = await service.list_recent_repos("octocat")
        await service.aclose()
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._token = settings.github_token
        self._client = httpx.AsyncClient(
            base_url=settings.github_api_url,
            timeout=settings.github_timeout,
            headers=self._get_headers(),
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    async def list_recent_repos(self, username: str) -> Any:
        """
        Return the user's most recently created repositories as decoded JSON.

        Raises:
            NotFound: GitHub answered with anything other than 200.
            ServerError: The request never produced a response.
        """
        path = f"/users/{quote(username, safe='')}/repos"
        params = {"per_page": REPO_LIMIT, "sort": "created:asc"}

        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("github_request_failed", username=username, error=str(e))
            raise ServerError() from e

        if response.status_code != 200:
            logger.info(
                "github_profile_not_found",
                username=username,
                status_code=response.status_code,
            )
            raise NotFound("No Github profile found", status_code=404)

        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()
