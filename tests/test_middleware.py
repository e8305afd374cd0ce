"""
Unit tests for middleware: RequestIDMiddleware and RequestTimingMiddleware.

Uses httpx.AsyncClient against a lightweight FastAPI test app to exercise
both middleware classes through their full dispatch cycle.
"""

import logging
import uuid

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from compass.core.logging import RequestIdFilter, request_id_var
from compass.middleware import REQUEST_ID_HEADER, RequestIDMiddleware, RequestTimingMiddleware


def _make_test_app() -> FastAPI:
    """Create a minimal FastAPI app with both middleware classes."""
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RequestTimingMiddleware)

    @app.get("/test")
    async def test_endpoint():
        return {"ok": True, "request_id": request_id_var.get()}

    return app


@pytest.fixture()
def test_app():
    return _make_test_app()


# ────────────────────────────────────────────────────────────────────────────
# RequestIDMiddleware tests
# ────────────────────────────────────────────────────────────────────────────


class TestRequestIDMiddleware:
    """Tests for X-Request-ID header injection."""

    @pytest.mark.asyncio
    async def test_generates_request_id_when_absent(self, test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/test")

        request_id = resp.headers[REQUEST_ID_HEADER]
        uuid.UUID(request_id)  # raises if invalid

    @pytest.mark.asyncio
    async def test_honours_existing_request_id(self, test_app):
        custom_id = "my-trace-id-12345"
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/test", headers={REQUEST_ID_HEADER: custom_id})

        assert resp.headers[REQUEST_ID_HEADER] == custom_id

    @pytest.mark.asyncio
    async def test_request_id_visible_to_handlers(self, test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/test", headers={REQUEST_ID_HEADER: "abc"})

        assert resp.json()["request_id"] == "abc"
        assert request_id_var.get() is None


class TestRequestIdFilter:
    def test_stamps_current_request_id(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("req-1")
        try:
            assert RequestIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)
        assert record.request_id == "req-1"

    def test_outside_a_request(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        RequestIdFilter().filter(record)
        assert record.request_id is None


# ────────────────────────────────────────────────────────────────────────────
# RequestTimingMiddleware tests
# ────────────────────────────────────────────────────────────────────────────


class TestRequestTimingMiddleware:
    """Tests for X-Process-Time header injection."""

    @pytest.mark.asyncio
    async def test_adds_process_time_header(self, test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/test")

        assert resp.headers["X-Process-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_process_time_is_positive(self, test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/test")

        time_str = resp.headers["X-Process-Time"].replace("ms", "")
        assert float(time_str) >= 0
