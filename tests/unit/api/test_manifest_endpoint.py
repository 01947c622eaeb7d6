"""
Tests for GET /mcp/manifest and GET /resources/user-profile.
"""

import json

from fastapi.testclient import TestClient

from mcp_tasks.core.config import DEFAULT_MANIFEST_PATH, Settings
from mcp_tasks.main import create_app


class TestManifestEndpoint:
    def test_serves_packaged_manifest_verbatim(self, client):
        with open(DEFAULT_MANIFEST_PATH, encoding="utf-8") as f:
            expected = json.load(f)

        response = client.get("/mcp/manifest")

        assert response.status_code == 200
        assert response.json() == expected

    def test_lists_the_task_tools(self, client):
        tools = client.get("/mcp/manifest").json()["tools"]

        assert [tool["name"] for tool in tools] == [
            "create-task",
            "list-tasks",
            "mark-complete",
            "update-task",
        ]

    def test_custom_manifest_path(self, tmp_path):
        document = {"name": "custom", "tools": [{"name": "list-tasks"}], "extra": [1, 2]}
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        app = create_app(
            Settings(manifest_path=str(path), tasks_file=str(tmp_path / "tasks.json"))
        )

        response = TestClient(app).get("/mcp/manifest")

        assert response.json() == document


class TestUserProfileResource:
    def test_returns_static_profile(self, client):
        response = client.get("/resources/user-profile")

        assert response.status_code == 200
        assert response.json() == {"id": "user-001", "name": "Roland", "role": "AI Engineer"}
