"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from api import app
from shared.config import get_settings

client = TestClient(app)


class TestHealthEndpoints:
    def test_health_check(self):
        """Health endpoint should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0"}

    def test_readiness_reports_missing_supabase(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "")
        get_settings.cache_clear()

        response = client.get("/api/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "not_ready",
            "supabase": "missing",
            "app_url": "configured",
        }

    def test_readiness_ready(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
        get_settings.cache_clear()

        response = client.get("/api/ready")

        assert response.json()["status"] == "ready"
