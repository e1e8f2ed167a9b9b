"""Tests for the admin dashboard, Behance sync route and uploads."""

import io
import json
import re
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from PIL import Image
from sqlalchemy import select

import catso.behance.sync as sync_module
from catso.config import config
from catso.models import Project

PROFILE_URL = "https://www.behance.net/catsoav"
PADDING = "<i></i>" * 400

PROFILE_HTML = "<html><body>" + PADDING.join(
    [
        '<a href="https://www.behance.net/gallery/111111/Summer-Video-Reel">'
        "<span>Summer Video Reel</span></a>",
        '<a href="https://www.behance.net/gallery/222222/Brand-Campaign">'
        "<span>Brand Campaign</span></a>",
    ]
) + "</body></html>"


def _response(status_code: int, text: str = "") -> MagicMock:
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.text = text
    return mock_resp


@pytest.fixture(autouse=True)
def behance_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "BEHANCE_PROFILE_URL", PROFILE_URL)
    monkeypatch.setattr(config, "BEHANCE_API_KEY", None)


@pytest.mark.asyncio
async def test_dashboard_renders(test_client: Any) -> None:
    client, _, _, _ = test_client

    response = await client.get("/admin")

    assert response.status_code == 200
    assert "Sample Project" in response.text
    assert "Sync from Behance" in response.text


@pytest.mark.asyncio
async def test_dashboard_offers_project_form(test_client: Any) -> None:
    client, _, _, project_id = test_client

    response = await client.get("/admin")

    assert response.status_code == 200
    assert 'id="project-form"' in response.text
    assert 'data-target="image_url"' in response.text
    assert 'data-target="video_url"' in response.text
    assert "/api/upload" in response.text

    match = re.search(
        r'<script id="project-data" type="application/json">(.*?)</script>',
        response.text,
        re.DOTALL,
    )
    assert match is not None
    project_data = json.loads(match.group(1))
    assert project_data[str(project_id)]["title"] == "Sample Project"
    assert project_data[str(project_id)]["video_url"].endswith("dQw4w9WgXcQ")


@pytest.mark.asyncio
async def test_categories_page_renders(test_client: Any) -> None:
    client, _, _, _ = test_client

    response = await client.get("/admin/categories")

    assert response.status_code == 200
    assert "Videoclips" in response.text
    assert "Commercial" in response.text


@pytest.mark.asyncio
async def test_dashboard_requires_admin(test_client: Any, visitor: Any) -> None:
    client, _, _, _ = test_client

    response = await client.get("/admin")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_sync_imports_projects(test_client: Any) -> None:
    client, session_factory, user_id, _ = test_client

    async def _mock_get(url: str, **kwargs: Any) -> MagicMock:
        if url == PROFILE_URL:
            return _response(200, PROFILE_HTML)
        if "/gallery/222222/" in url:
            return _response(
                200,
                '<iframe src="https://player.vimeo.com/video/123456789"></iframe>',
            )
        return _response(404)

    with patch("httpx.AsyncClient.get", side_effect=_mock_get):
        response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert body["imported"] == ["Summer Video Reel", "Brand Campaign"]
    assert body["skipped"] == []
    assert body["strategy"] == "gallery-link"
    assert body["message"] == "Sync complete. 2 new project(s) imported."

    async with session_factory() as session:
        result = await session.execute(
            select(Project).where(Project.title == "Brand Campaign")
        )
        project = result.scalar_one()
    assert project.video_url == "https://vimeo.com/123456789"
    assert project.author_id == user_id
    assert project.order == 2


@pytest.mark.asyncio
async def test_sync_reports_up_to_date(test_client: Any) -> None:
    client, _, _, _ = test_client

    async def _mock_get(url: str, **kwargs: Any) -> MagicMock:
        if url == PROFILE_URL:
            return _response(200, PROFILE_HTML)
        return _response(404)

    with patch("httpx.AsyncClient.get", side_effect=_mock_get):
        await client.post("/api/admin/behance/sync")
        response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 0
    assert body["skipped"] == ["Summer Video Reel", "Brand Campaign"]
    assert body["message"].startswith("Already up to date")


@pytest.mark.asyncio
async def test_sync_no_projects_found(test_client: Any) -> None:
    client, _, _, _ = test_client

    with patch(
        "httpx.AsyncClient.get",
        side_effect=AsyncMock(return_value=_response(200, "<html></html>")),
    ):
        response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 404
    body = response.json()
    assert "No projects found" in body["error"]
    assert "count" not in body


@pytest.mark.asyncio
async def test_sync_profile_unreachable(test_client: Any) -> None:
    client, _, _, _ = test_client

    with patch(
        "httpx.AsyncClient.get",
        side_effect=AsyncMock(return_value=_response(503, "maintenance")),
    ):
        response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 502
    assert "HTTP 503" in response.json()["error"]


@pytest.mark.asyncio
async def test_sync_already_running(test_client: Any) -> None:
    client, _, _, _ = test_client

    async with sync_module._sync_lock:
        response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_sync_unexpected_error(test_client: Any) -> None:
    client, _, _, _ = test_client

    with patch(
        "catso.routes.admin.sync_profile",
        AsyncMock(side_effect=RuntimeError("database is locked")),
    ):
        response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error: database is locked"}


@pytest.mark.asyncio
async def test_sync_requires_admin(test_client: Any, visitor: Any) -> None:
    client, _, _, _ = test_client

    response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_sync_requires_login(test_client: Any, anonymous: None) -> None:
    client, _, _, _ = test_client

    response = await client.post("/api/admin/behance/sync")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_upload_image_creates_thumbnail(test_client: Any) -> None:
    client, _, _, _ = test_client

    buffer = io.BytesIO()
    Image.new("RGB", (800, 600), color=(200, 20, 20)).save(buffer, format="PNG")

    response = await client.post(
        "/api/upload",
        files={"file": ("cover art.png", buffer.getvalue(), "image/png")},
    )

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("/media/uploads/")
    assert url.endswith(".png")

    filename = url.removeprefix("/media/uploads/")
    assert (config.MEDIA_ROOT / "uploads" / filename).exists()
    thumb = config.MEDIA_ROOT / "thumbnails" / "uploads" / f"thumb_{filename[:-4]}.jpg"
    assert thumb.exists()
    with Image.open(thumb) as img:
        assert max(img.size) <= 480


@pytest.mark.asyncio
async def test_upload_video_is_stored_as_is(test_client: Any) -> None:
    client, _, _, _ = test_client

    response = await client.post(
        "/api/upload",
        files={"file": ("reel.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
    )

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.endswith(".mp4")
    filename = url.removeprefix("/media/uploads/")
    assert (config.MEDIA_ROOT / "uploads" / filename).read_bytes().endswith(b"mp42")


@pytest.mark.asyncio
async def test_upload_without_file(test_client: Any) -> None:
    client, _, _, _ = test_client

    response = await client.post("/api/upload", data={"other": "value"})

    assert response.status_code == 400
