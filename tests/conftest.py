"""Shared fixtures — every test gets its own data file and upload directory."""

import logging
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tinypress.config import Settings
from tinypress.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_file=str(tmp_path / "data" / "articles.json"),
        upload_dir=str(tmp_path / "uploads"),
        tinymce_dir=str(tmp_path / "tinymce"),
        max_upload_size_mb=1,
        log_file="",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def restore_logging():
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield
    for handler in [h for h in root.handlers if h not in before]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    for name in ("tinypress.infrastructure.storage", "uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(logging.NOTSET)
