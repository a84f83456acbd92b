"""Tests for health endpoint."""

import eduportal
from eduportal.web.schemas import HealthResponse


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_ok(self, client):
        """Health endpoint returns status ok."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health_returns_version(self, client):
        data = client.get("/health").json()
        assert data["version"] == "0.1.0"

    def test_health_returns_timestamp(self, client):
        data = client.get("/health").json()
        # ISO format check
        assert "T" in data["timestamp"]

    def test_health_does_not_touch_backend(self, client, backend):
        client.get("/health")
        assert backend.calls == []

    def test_health_version_tracks_package(self, client):
        assert client.get("/health").json()["version"] == eduportal.__version__

    def test_schema_default_version_tracks_package(self):
        assert HealthResponse().version == eduportal.__version__
