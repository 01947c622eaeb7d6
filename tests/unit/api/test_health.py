"""
Tests for GET /health - Liveness endpoint.
"""

from fastapi.testclient import TestClient

from mcp_tasks import __version__
from mcp_tasks.core.config import Settings
from mcp_tasks.main import create_app


class TestHealthRouter:
    def test_health_returns_200(self, client):
        response = client.get("/health")

        assert response.status_code == 200

    def test_health_payload(self, client):
        """Reports the version and the number of manifest tools."""
        data = client.get("/health").json()

        assert data == {"status": "healthy", "version": __version__, "tools": 4}

    def test_health_does_not_need_a_credential(self, tasks_file):
        app = create_app(Settings(openai_api_key="", tasks_file=str(tasks_file)))

        assert TestClient(app).get("/health").status_code == 200
