# tests/test_health.py
from typing import Any

import pytest


@pytest.mark.asyncio
async def test_root_responds(client: Any) -> None:
    """Verify that the root endpoint describes the service."""
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["docs"] == "/docs"


@pytest.mark.asyncio
async def test_health(client: Any) -> None:
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_openapi_documents_typed_errors(client: Any) -> None:
    r = await client.get("/openapi.json")
    assert r.status_code == 200
    responses = r.json()["paths"]["/api/v1/chat/messages"]["post"]["responses"]
    assert {"201", "400", "403", "404", "503"} <= set(responses)
