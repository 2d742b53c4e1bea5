"""Tests for application-wide behaviour: envelopes, CORS and health checks."""

from fastapi.testclient import TestClient

from src.storefront.api.http.middleware.cors import cors_headers
from src.storefront.runtime.context import get_config


class TestCors:
    def test_preflight(self, client: TestClient):
        """Test OPTIONS on an API path is answered directly."""
        response = client.options("/api/products")

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        expected = cors_headers(get_config().app.cors)
        assert response.headers["Access-Control-Allow-Methods"] == expected["Access-Control-Allow-Methods"]
        assert response.headers["Access-Control-Allow-Headers"] == expected["Access-Control-Allow-Headers"]
        assert response.headers["Access-Control-Max-Age"] == expected["Access-Control-Max-Age"]

    def test_headers_on_api_responses(self, client: TestClient):
        """Test normal API responses carry the CORS headers."""
        response = client.get("/api/categories")

        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_headers_on_api_errors(self, client: TestClient):
        """Test error responses also carry the CORS headers."""
        response = client.get("/api/products/missing")

        assert response.status_code == 404
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_no_headers_outside_api(self, client: TestClient):
        """Test non-API paths are left alone."""
        response = client.get("/health")

        assert "Access-Control-Allow-Origin" not in response.headers


class TestEnvelopes:
    def test_unknown_route(self, client: TestClient):
        """Test unknown paths get the error envelope."""
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["error"] == "Not Found"

    def test_request_id_echoed(self, client: TestClient):
        """Test the caller's request id is returned."""
        response = client.get("/api/categories", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_security_headers(self, client: TestClient):
        """Test the security headers are set."""
        response = client.get("/api/categories")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestHealth:
    def test_health(self, client: TestClient):
        """Test the liveness check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client: TestClient):
        """Test the readiness check covers the database."""
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
