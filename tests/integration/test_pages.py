"""Tests for the HTML pages and the editor upload endpoint."""

import re
from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from tinypress.domain.entities import Article


def _draft_id(html: str) -> str:
    match = re.search(r'name="id" value="([A-Za-z0-9]{8})"', html)
    assert match, "create form should embed a draft id"
    return match.group(1)


@pytest.mark.asyncio
async def test_create_form_embeds_draft_id(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    draft_id = _draft_id(response.text)
    assert f"/upload?id={draft_id}" in response.text


@pytest.mark.asyncio
async def test_create_redirects_to_article(client: AsyncClient):
    draft_id = _draft_id((await client.get("/")).text)

    response = await client.post(
        "/",
        data={"id": draft_id, "title": "Hello", "content": "<p>Hi <b>there</b></p>"},
    )
    assert response.status_code == 303
    assert response.headers["location"] == f"/article?id={draft_id}"

    page = await client.get(f"/article?id={draft_id}")
    assert page.status_code == 200
    assert "<h1>Hello</h1>" in page.text
    # Content is rendered as markup, not escaped
    assert "<p>Hi <b>there</b></p>" in page.text


@pytest.mark.asyncio
async def test_create_with_taken_id_conflicts(client: AsyncClient):
    await client.post("/", data={"id": "ab12CD34", "title": "First", "content": ""})
    response = await client.post("/", data={"id": "ab12CD34", "title": "Second", "content": ""})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_with_invalid_id_rejected(client: AsyncClient):
    response = await client.post("/", data={"id": "nope", "title": "x", "content": ""})
    assert response.status_code == 400
    assert response.text == "Invalid ID"


@pytest.mark.asyncio
async def test_create_without_title_rejected(client: AsyncClient):
    response = await client.post("/", data={"id": "ab12CD34", "title": "  ", "content": "x"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_article_missing_id_is_bad_request(client: AsyncClient):
    response = await client.get("/article")
    assert response.status_code == 400
    assert response.text == "Missing ID"


@pytest.mark.asyncio
async def test_article_unknown_id_is_not_found(client: AsyncClient):
    response = await client.get("/article?id=missing")
    assert response.status_code == 404
    assert response.text == "Article not found"


@pytest.mark.asyncio
async def test_article_page_formats_date(client: AsyncClient, app: FastAPI):
    app.state.article_store.put(
        Article(
            id="ab12CD34",
            title="Dated",
            content="",
            created_at=datetime(2006, 1, 2, 15, 4, tzinfo=timezone.utc),
        )
    )
    page = await client.get("/article?id=ab12CD34")
    assert "January 2, 2006 at 15:04" in page.text


@pytest.mark.asyncio
async def test_overview_lists_newest_first(client: AsyncClient, app: FastAPI):
    store = app.state.article_store
    for day, article_id in ((1, "first001"), (3, "third001"), (2, "secnd001")):
        store.put(
            Article(
                id=article_id,
                title=f"Title {article_id}",
                content="",
                created_at=datetime(2024, 5, day, tzinfo=timezone.utc),
            )
        )

    page = await client.get("/overview")
    assert page.status_code == 200
    positions = [page.text.index(f"/article?id={i}") for i in ("third001", "secnd001", "first001")]
    assert positions == sorted(positions)


@pytest.mark.asyncio
async def test_overview_empty(client: AsyncClient):
    page = await client.get("/overview")
    assert page.status_code == 200
    assert "No articles yet." in page.text


@pytest.mark.asyncio
async def test_upload_returns_location_and_serves_file(client: AsyncClient, settings):
    response = await client.post(
        "/upload?id=ab12CD34",
        files={"file": ("pic.png", b"\x89PNG-bytes", "image/png")},
    )
    assert response.status_code == 200
    assert response.json() == {"location": "/uploads/ab12CD34/pic.png"}

    served = await client.get("/uploads/ab12CD34/pic.png")
    assert served.status_code == 200
    assert served.content == b"\x89PNG-bytes"


@pytest.mark.asyncio
async def test_upload_without_id(client: AsyncClient):
    response = await client.post("/upload", files={"file": ("pic.png", b"x", "image/png")})
    assert response.status_code == 400
    assert response.text == "Missing ID"


@pytest.mark.asyncio
async def test_upload_without_file(client: AsyncClient):
    response = await client.post("/upload?id=ab12CD34", data={"other": "x"})
    assert response.status_code == 400
    assert response.text == "Error retrieving the file"


@pytest.mark.asyncio
async def test_upload_rejects_traversal_id(client: AsyncClient):
    response = await client.post(
        "/upload?id=..%2F..%2Fetc", files={"file": ("pic.png", b"x", "image/png")}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_too_large(client: AsyncClient):
    response = await client.post(
        "/upload?id=ab12CD34",
        files={"file": ("big.bin", b"x" * (1024 * 1024 + 1), "application/octet-stream")},
    )
    assert response.status_code == 400
    assert response.text == "File too large"


@pytest.mark.asyncio
async def test_long_title_is_accepted(client: AsyncClient):
    title = "x" * 300
    response = await client.post("/", data={"id": "ab12CD34", "title": title, "content": ""})
    assert response.status_code == 303

    page = await client.get("/article?id=ab12CD34")
    assert page.status_code == 200
    assert title in page.text
