"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from core.config import get_settings


class TestHealthCheck:
    """Tests for basic health check endpoint."""

    def test_health_check_returns_success(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["status"] == "healthy"
        assert "TalentPilot" in data["data"]["message"]
        assert data["message"] == "Health check successful"

    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/health", headers={"X-Correlation-ID": "trace-123"}
        )

        assert response.headers["X-Correlation-ID"] == "trace-123"

    def test_correlation_id_is_generated(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")

        assert response.headers["X-Correlation-ID"]

    def test_root(self, client: TestClient) -> None:
        assert client.get("/").json()["docs"] == "/api/v1/docs"


class TestConfigCheck:
    """Tests for the workflow configuration report."""

    def test_reports_configured_apps_with_masked_keys(
        self, client: TestClient, no_app_keys, monkeypatch
    ) -> None:
        monkeypatch.setenv("DIFY_RESUME_API_KEY", "app-resume-0123456789")
        monkeypatch.setenv("DIFY_API_URL", "https://dify.internal/v1/")
        get_settings.cache_clear()

        response = client.get("/api/v1/health/config")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["api_url"] == "https://dify.internal/v1"
        assert data["apps"]["resume"] == {
            "configured": True,
            "key_prefix": "app-resu...",
        }
        # Completion falls back to the resume app key
        assert data["apps"]["completion"]["configured"] is True
        assert data["apps"]["jd"] == {"configured": False, "key_prefix": None}
        assert "0123456789" not in response.text
