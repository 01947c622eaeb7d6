"""
Tests for mcp_tasks/api/errors.py - Exception to HTTP status translation.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from mcp_tasks.api.errors import (
    clamp_status,
    format_validation_errors,
    register_exception_handlers,
    status_for_exception,
)
from mcp_tasks.core.exceptions import (
    CompletionTimeoutError,
    ConfigurationError,
    ProviderError,
    TaskStoreError,
    ToolArgumentsError,
)


class Item(BaseModel):
    name: str


class TestClampStatus:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (400, 400),
            (404, 404),
            (599, 599),
            (399, 500),
            (600, 500),
            (200, 500),
            (None, 500),
            ("429", 500),
            (True, 500),
        ],
    )
    def test_clamp(self, value, expected):
        assert clamp_status(value) == expected


class TestStatusForException:
    def test_configuration_error_is_503(self):
        assert status_for_exception(ConfigurationError("no key")) == 503

    def test_timeout_is_500(self):
        assert status_for_exception(CompletionTimeoutError("slow", timeout_ms=5)) == 500

    def test_provider_error_uses_upstream_status(self):
        assert status_for_exception(ProviderError("x", provider="openai", status_code=401)) == 401

    @pytest.mark.parametrize(
        "exc",
        [
            ToolArgumentsError("bad args", tool_name="create-task"),
            TaskStoreError("disk", path="/tmp/x"),
        ],
    )
    def test_other_faults_are_500(self, exc):
        assert status_for_exception(exc) == 500


class TestRegisteredHandler:
    def test_body_is_flat_error_message(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/boom")
        async def boom():
            raise ProviderError("upstream rejected the key", provider="openai", status_code=401)

        response = TestClient(app).get("/boom")

        assert response.status_code == 401
        assert response.json() == {"error": "upstream rejected the key"}

    def test_request_validation_uses_error_body(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.post("/items")
        async def create_item(item: Item):
            return item

        response = TestClient(app).post("/items", json={})

        assert response.status_code == 422
        body = response.json()
        assert list(body) == ["error"]
        assert "name" in body["error"]

    def test_unexpected_exception_is_500_with_error_body(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/crash")
        async def crash():
            raise RuntimeError("secret internals")

        response = TestClient(app, raise_server_exceptions=False).get("/crash")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestFormatValidationErrors:
    def test_joins_locations_without_body_prefix(self):
        errors = [
            {"loc": ("body", "message"), "msg": "Field required"},
            {"loc": ("query", "limit"), "msg": "Input should be a valid integer"},
        ]

        assert format_validation_errors(errors) == (
            "message: Field required; query.limit: Input should be a valid integer"
        )

    def test_empty_list(self):
        assert format_validation_errors([]) == "Invalid request"
