"""Tests for global exception handlers.

Validates that every exception type maps to the documented status code and
error body, and that unexpected errors never leak internals.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from guide_api.core.errors import AppError, LLMAppError, ValidationAppError
from guide_api.core.exception_handlers import (
    general_exception_handler,
    setup_exception_handlers,
)


class EchoBody(BaseModel):
    text: str


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/validation")
    async def validation_endpoint():
        raise ValidationAppError(
            code="message_too_long",
            message="Message exceeds 10 characters",
            details={"max_value": 10, "actual_value": 42},
        )

    @app.get("/llm")
    async def llm_endpoint():
        raise LLMAppError(code="llm_request_failed", message="upstream failed")

    @app.post("/echo")
    async def echo_endpoint(body: EchoBody):
        return body

    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers)


class TestAppErrorHandler:
    def test_validation_error_returns_400_with_details(self, client: TestClient):
        response = client.get("/validation")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "message_too_long"
        assert error["message"] == "Message exceeds 10 characters"
        assert error["details"] == {"max_value": 10, "actual_value": 42}
        assert "request_id" in error

    def test_llm_error_returns_500_without_details_key(self, client: TestClient):
        response = client.get("/llm")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "llm_request_failed"
        assert "details" not in error


class TestRequestValidationHandler:
    def test_body_validation_returns_400(self, client: TestClient):
        response = client.post("/echo", json={"wrong": 1})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "validation_error"
        assert error["details"]["errors"][0]["loc"] == ["body", "text"]

    def test_valid_body_passes_through(self, client: TestClient):
        response = client.post("/echo", json={"text": "Aktau"})

        assert response.status_code == 200
        assert response.json() == {"text": "Aktau"}


class TestGeneralExceptionHandler:
    def test_returns_generic_500(self):
        request = AsyncMock()
        request.url.path = "/api/chat"
        request.method = "POST"

        exc = RuntimeError("database password is hunter2")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        assert "hunter2" not in data["error"]["message"]
        assert "Traceback" not in bytes(response.body).decode()

    def test_handlers_registered(self, app_with_handlers: FastAPI):
        assert AppError in app_with_handlers.exception_handlers
        assert Exception in app_with_handlers.exception_handlers
