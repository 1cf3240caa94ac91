"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    LinkNotFoundError,
    ReorderMismatchError,
    StoreError,
    TypeLockedError,
    UsernameTakenError,
)
from domain.entities.validation import FieldError, raise_for_errors


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_not_found_returns_error_code_and_message(self) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise LinkNotFoundError("some-id")

        response = await _get(app, "/raise")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "LINK_NOT_FOUND"
        assert "some-id" in body["message"]
        assert body["details"]["link_id"] == "some-id"

    @pytest.mark.asyncio
    async def test_field_errors_listed(self) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise_for_errors([FieldError("title", "required"), FieldError("url", "format")])

        response = await _get(app, "/raise")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == [
            {"field": "title", "reason": "required"},
            {"field": "url", "reason": "format"},
        ]

    @pytest.mark.asyncio
    async def test_type_locked(self) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise TypeLockedError()

        response = await _get(app, "/raise")

        assert response.status_code == 400
        assert response.json()["error_code"] == "TYPE_LOCKED"

    @pytest.mark.asyncio
    async def test_username_taken_is_conflict(self) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise UsernameTakenError("jane")

        response = await _get(app, "/raise")

        assert response.status_code == 409
        assert response.json()["details"]["reason"] == "taken"

    @pytest.mark.asyncio
    async def test_store_error_is_retryable(self) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise StoreError("commit")

        response = await _get(app, "/raise")

        assert response.status_code == 503
        body = response.json()
        assert body["error_code"] == "DATABASE_ERROR"
        assert body["details"]["retryable"] is True

    @pytest.mark.asyncio
    async def test_reorder_mismatch_details(self) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise ReorderMismatchError(missing=["a"], unexpected=["b"])

        response = await _get(app, "/raise")

        assert response.status_code == 400
        assert response.json()["details"] == {"missing": ["a"], "unexpected": ["b"]}

    @pytest.mark.asyncio
    async def test_value_error_is_bad_request(self) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise ValueError("Not editable: position")

        response = await _get(app, "/raise")

        assert response.status_code == 400
        assert response.json()["message"] == "Not editable: position"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        response = await _get(app, "/raise")

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_validation_error_strips_body_prefix(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            index: int = Field(..., ge=0)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"index": -1})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "index"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("Something went wrong"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
