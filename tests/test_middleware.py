"""
Tests for ASGI middleware.

Tests:
- Request ID middleware
- Request logging middleware
"""


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    def _make_app(self):
        from starlette.applications import Starlette
        from starlette.responses import JSONResponse
        from starlette.routing import Route

        from devconnect.logging import RequestIDMiddleware

        async def echo_request_id(request):
            return JSONResponse({"request_id": request.state.request_id})

        app = Starlette(routes=[Route("/test", echo_request_id)])
        app.add_middleware(RequestIDMiddleware)
        return app

    def test_generates_request_id(self):
        """Test that a request ID is generated and echoed in the response."""
        from starlette.testclient import TestClient

        client = TestClient(self._make_app())
        response = client.get("/test")

        request_id = response.headers["x-request-id"]
        assert request_id
        assert response.json() == {"request_id": request_id}

    def test_honours_incoming_request_id(self):
        """Test that a caller-supplied request ID is kept."""
        from starlette.testclient import TestClient

        client = TestClient(self._make_app())
        response = client.get("/test", headers={"X-Request-ID": "abc-123"})

        assert response.headers["x-request-id"] == "abc-123"
        assert response.json() == {"request_id": "abc-123"}


class TestRequestLoggingMiddleware:
    """Tests for RequestLoggingMiddleware."""

    def test_passes_response_through(self):
        from starlette.applications import Starlette
        from starlette.responses import PlainTextResponse
        from starlette.routing import Route
        from starlette.testclient import TestClient

        from devconnect.logging import RequestLoggingMiddleware

        async def teapot(request):
            return PlainTextResponse("short and stout", status_code=418)

        app = Starlette(routes=[Route("/teapot", teapot)])
        app.add_middleware(RequestLoggingMiddleware)

        response = TestClient(app).get("/teapot")

        assert response.status_code == 418
        assert response.text == "short and stout"

    def test_logs_request_completion(self):
        from starlette.applications import Starlette
        from starlette.responses import PlainTextResponse
        from starlette.routing import Route
        from starlette.testclient import TestClient
        from structlog.testing import capture_logs

        from devconnect.logging import RequestLoggingMiddleware

        async def ok(request):
            return PlainTextResponse("ok")

        app = Starlette(routes=[Route("/ok", ok)])
        app.add_middleware(RequestLoggingMiddleware)

        with capture_logs() as logs:
            TestClient(app).get("/ok")

        events = [entry["event"] for entry in logs]
        assert events == ["request_started", "request_complete"]
        assert logs[-1]["status_code"] == 200
        assert logs[-1]["path"] == "/ok"
