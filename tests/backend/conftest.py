from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.app.auth.jwt import create_access_token
from backend.app.main import create_app
from devconnect.services import GitHubService


@pytest.fixture
def test_app_client(test_settings, test_db) -> Iterator[TestClient]:
    app = create_app(test_settings)

    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(test_settings) -> Callable[[int], dict[str, str]]:
    def _headers(user_id: int) -> dict[str, str]:
        return {"x-auth-token": create_access_token(user_id, test_settings)}

    return _headers


@pytest.fixture
def authorized_client(test_app_client, make_user, auth_headers):
    """Client plus the ID and headers of a freshly created user."""
    user_id = make_user()
    return test_app_client, user_id, auth_headers(user_id)


@pytest.fixture
def mock_github(test_app_client, test_settings):
    """Swap the app's GitHub client for one backed by ``handler``."""

    def _install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        test_app_client.app.state.github = GitHubService(
            test_settings, transport=httpx.MockTransport(handler)
        )

    return _install
