import httpx
import pytest
from fastapi import status

from drivelog_api import __VERSION__


@pytest.mark.asyncio
async def test_health(app_client: httpx.AsyncClient):
    response = await app_client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "healthy", "database": "ok"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(app_client: httpx.AsyncClient):
    response = await app_client.get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
    generated = await app_client.get("/health")
    assert len(generated.headers["X-Request-ID"]) == 32


@pytest.mark.asyncio
async def test_root(app_client: httpx.AsyncClient):
    response = await app_client.get("/")

    assert response.json()["version"] == __VERSION__
    assert response.json()["documentation"] == "/v1/docs"


@pytest.mark.asyncio
async def test_metrics_hidden_behind_ingress(app_client: httpx.AsyncClient):
    response = await app_client.get(
        "/metrics", headers={"X-Forwarded-For": "203.0.113.7"}
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_openapi_lists_logbook_routes(app_client: httpx.AsyncClient):
    response = await app_client.get("/v1/openapi.json")

    paths = response.json()["paths"]
    assert "/v1/fahrtenbuch" in paths
    assert "/v1/fahrtenbuch/{entry_id}/files" in paths
    assert "/v1/vehicles/{vehicle_id}/assignments/{profile_id}" in paths
