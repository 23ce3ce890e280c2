"""
Tests for request logging middleware helpers
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bookshelf.middleware import (
    LoggingContextMiddleware,
    operation_name_from_payload,
    sanitize_query_params,
)


class TestSanitizeQueryParams:
    def test_sensitive_keys_redacted(self):
        params = {"password": "pw", "api_key": "k", "X-Auth-Token": "t", "page": "2"}

        assert sanitize_query_params(params) == {
            "password": "[REDACTED]",
            "api_key": "[REDACTED]",
            "X-Auth-Token": "[REDACTED]",
            "page": "2",
        }


class TestOperationName:
    @pytest.mark.parametrize(
        "operation_name,query,expected",
        [
            ("Explicit", "query Other { getUser { _id } }", "Explicit"),
            (None, "query GetUser { getUser(username: \"ada\") { _id } }", "GetUser"),
            (None, "mutation Save { saveBook(input: {}) { _id } }", "mutation:Save"),
            (None, "{ __schema { types { name } } }", "__introspection"),
            (None, "{ getUser { _id } }", "unnamed_operation"),
            (None, None, None),
            ("", "", None),
        ],
    )
    def test_operation_name(self, operation_name, query, expected):
        assert operation_name_from_payload(operation_name, query) == expected


class TestLoggingContextMiddleware:
    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(LoggingContextMiddleware)

        @app.get("/ping")
        async def ping():  # pyright: ignore [reportUnusedFunction]
            return {"ok": True}

        return TestClient(app)

    def test_request_id_echoed(self, client):
        response = client.get("/ping", headers={"X-Request-ID": "req-123"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_generated(self, client):
        response = client.get("/ping")

        assert response.headers["X-Request-ID"]
