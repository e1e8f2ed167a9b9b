from typing import Any

import pytest


@pytest.mark.asyncio
async def test_healthz(test_client: Any) -> None:
    """Verify that the health check endpoint responds with 200 OK."""
    client, _, _, _ = test_client
    response = await client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_login_page_renders(test_client: Any) -> None:
    client, _, _, _ = test_client
    response = await client.get("/login")
    assert response.status_code == 200
    assert 'action="/auth/login"' in response.text


@pytest.mark.asyncio
async def test_static_placeholder_is_served(test_client: Any) -> None:
    client, _, _, _ = test_client
    response = await client.get("/static/placeholder-project.svg")
    assert response.status_code == 200
