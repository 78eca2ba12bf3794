"""Tests for request_id in error responses."""

from uuid import uuid4, uuid7

import pytest
from fastapi.testclient import TestClient

from src.kanban.api.dependencies import get_project_service
from src.kanban.core.exceptions import NotFoundError
from src.kanban.main import create_app
from tests.conftest import make_token


class _MissingProjects:
    async def get(self, project_id, actor_id):
        raise NotFoundError(f"Project {project_id} not found")


@pytest.fixture
def client() -> TestClient:
    """Test client fixture."""
    app = create_app()
    app.dependency_overrides[get_project_service] = lambda: _MissingProjects()
    return TestClient(app)


def test_http_exception_includes_request_id(client: TestClient) -> None:
    """Test that HTTPException responses include request_id."""
    response = client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    data = response.json()
    assert "request_id" in data, "request_id not found in error response"
    assert "detail" in data, "detail not found in error response"
    assert isinstance(data["request_id"], str), "request_id is not a string"


def test_unauthenticated_includes_request_id(client: TestClient) -> None:
    response = client.get("/api/v1/projects")

    assert response.status_code == 401
    data = response.json()
    assert "request_id" in data
    assert data["detail"] == "Missing or invalid authorization header"


def test_domain_error_includes_request_id(client: TestClient) -> None:
    project_id = uuid7()

    response = client.get(
        f"/api/v1/projects/{project_id}",
        headers={"Authorization": f"Bearer {make_token(uuid7())}"},
    )

    assert response.status_code == 404
    data = response.json()
    assert data["detail"] == f"Project {project_id} not found"
    assert data["request_id"]


def test_incoming_request_id_is_echoed(client: TestClient) -> None:
    request_id = uuid4().hex

    response = client.get("/api/v1/nonexistent", headers={"X-Request-ID": request_id})

    assert response.json()["request_id"] == request_id
    assert response.headers["X-Request-ID"] == request_id


def test_different_requests_have_different_ids(client: TestClient) -> None:
    """Test that different requests get different request IDs."""
    data1 = client.get("/api/v1/endpoint1").json()
    data2 = client.get("/api/v1/endpoint2").json()

    assert data1["request_id"] != data2["request_id"], "Different requests have same request_id"
