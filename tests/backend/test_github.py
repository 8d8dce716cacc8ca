import httpx

API = "/api/profile"

REPOS = [
    {"id": 1, "name": "hello-world", "html_url": "https://github.com/octocat/hello-world"},
    {"id": 2, "name": "spoon-knife", "html_url": "https://github.com/octocat/spoon-knife"},
]


def test_github_repos_are_relayed(test_app_client, mock_github):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=REPOS)

    mock_github(handler)

    resp = test_app_client.get(f"{API}/github/octocat")

    assert resp.status_code == 200
    assert resp.json() == REPOS

    request = seen[0]
    assert request.url.path == "/users/octocat/repos"
    assert request.url.params["per_page"] == "5"
    assert request.url.params["sort"] == "created:asc"
    assert request.headers["Authorization"] == "token test-github-token"
    assert request.headers["User-Agent"]


def test_github_lookup_needs_no_token(test_app_client, mock_github):
    mock_github(lambda request: httpx.Response(200, json=[]))

    resp = test_app_client.get(f"{API}/github/octocat")

    assert resp.status_code == 200
    assert resp.json() == []


def test_github_non_200_is_not_found(test_app_client, mock_github):
    mock_github(lambda request: httpx.Response(404, json={"message": "Not Found"}))

    resp = test_app_client.get(f"{API}/github/nobody-here")

    assert resp.status_code == 404
    assert resp.json() == {"msg": "No Github profile found"}


def test_github_rate_limited_is_not_found(test_app_client, mock_github):
    mock_github(lambda request: httpx.Response(403, json={"message": "API rate limit exceeded"}))

    resp = test_app_client.get(f"{API}/github/octocat")

    assert resp.status_code == 404
    assert resp.json() == {"msg": "No Github profile found"}


def test_github_transport_error_is_server_error(test_app_client, mock_github):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    mock_github(handler)

    resp = test_app_client.get(f"{API}/github/octocat")

    assert resp.status_code == 500
    assert resp.text == "Server Error"
