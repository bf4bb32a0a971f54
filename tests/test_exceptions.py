"""
Unit tests for domain exceptions and exception handler registration.

Tests cover:
- AppException, NotFoundException, ConflictException, BusinessRuleViolation
- The JSON bodies produced by each registered handler
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from lab_system.core.exceptions import (
    AppException,
    BusinessRuleViolation,
    ConflictException,
    NotFoundException,
    add_exception_handlers,
)


class TestAppException:
    """Tests for the base AppException."""

    def test_attributes(self):
        exc = AppException(status_code=400, message="bad request", details={"key": "v"})
        assert exc.status_code == 400
        assert exc.message == "bad request"
        assert exc.details == {"key": "v"}

    def test_str_representation(self):
        exc = AppException(status_code=418, message="I'm a teapot")
        assert str(exc) == "I'm a teapot"


class TestDomainExceptions:
    def test_not_found(self):
        exc = NotFoundException("User", 42)
        assert exc.status_code == 404
        assert "User" in exc.message
        assert "42" in exc.message

    def test_conflict(self):
        exc = ConflictException("Duplicate email")
        assert exc.status_code == 409
        assert isinstance(exc, AppException)

    def test_business_rule_violation(self):
        assert BusinessRuleViolation("nope").status_code == 422


def _make_app() -> FastAPI:
    app = FastAPI(debug=False)
    add_exception_handlers(app)

    class Body(BaseModel):
        name: str = Field(..., min_length=2)
        age: int

    @app.post("/validate")
    async def validate(body: Body):
        return {"ok": True}

    @app.get("/conflict")
    async def conflict():
        raise ConflictException("already there")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("unexpected")

    return app


class TestExceptionHandlersIntegration:
    """Invoke the actual exception handlers to cover their response logic."""

    @pytest.mark.asyncio
    async def test_app_exception_envelope(self):
        async with AsyncClient(transport=ASGITransport(app=_make_app()), base_url="http://test") as client:
            resp = await client.get("/conflict")
        assert resp.status_code == 409
        assert resp.json() == {"message": "already there", "errors": None}

    @pytest.mark.asyncio
    async def test_global_500_handler(self, caplog):
        """Unhandled exception → 500 with generic message, logged with traceback."""
        # raise_app_exceptions=False: Starlette's ServerErrorMiddleware re-raises
        # after our catch-all handler has produced the response.
        async with AsyncClient(
            transport=ASGITransport(app=_make_app(), raise_app_exceptions=False),
            base_url="http://test",
        ) as client:
            resp = await client.get("/crash")
        assert resp.status_code == 500
        body = resp.json()
        assert body["message"] == "Internal Server Error"
        assert body["errors"] == "unexpected"
        assert any(r.exc_info for r in caplog.records if r.levelname == "ERROR")

    @pytest.mark.asyncio
    async def test_validation_handler_returns_issue_list(self):
        async with AsyncClient(transport=ASGITransport(app=_make_app()), base_url="http://test") as client:
            resp = await client.post("/validate", json={"name": "x"})
        assert resp.status_code == 422
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["name"] == "ValidationError"
        issues = body["error"]["issues"]
        assert issues[0]["code"] == "too_small"
        assert issues[0]["path"] == ["name"]
        assert issues[1] == {"code": "invalid_type", "path": ["age"], "message": "Field required"}

    @pytest.mark.asyncio
    async def test_unknown_route_404(self):
        async with AsyncClient(transport=ASGITransport(app=_make_app()), base_url="http://test") as client:
            resp = await client.get("/nonexistent")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Not Found - /nonexistent"}

    @pytest.mark.asyncio
    async def test_method_not_allowed_keeps_detail(self):
        async with AsyncClient(transport=ASGITransport(app=_make_app()), base_url="http://test") as client:
            resp = await client.delete("/conflict")
        assert resp.status_code == 405
        assert resp.json() == {"message": "Method Not Allowed"}
