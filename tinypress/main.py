"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from tinypress.application.interfaces import PersistStatus
from tinypress.config import Settings, get_settings
from tinypress.infrastructure.identifiers import IdentifierGenerator
from tinypress.infrastructure.logging.log_config import setup_logging
from tinypress.infrastructure.logging.request_logging import log_requests
from tinypress.infrastructure.storage.json_article_store import JsonArticleStore
from tinypress.infrastructure.storage.upload_storage import UPLOADS_URL_PREFIX, LocalUploadStorage
from tinypress.presentation.api.router import router as api_router
from tinypress.presentation.web.pages import router as pages_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and load the article snapshot."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    result = app.state.article_store.load()
    if result.ok:
        logger.info("Article store ready", extra={"articles": len(app.state.article_store)})
    elif result.status is PersistStatus.MISSING:
        logger.info("Article store starting empty", extra={"status": result.status.value})
    else:
        logger.warning("Article store starting empty", extra={"status": result.status.value})

    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    identifiers = IdentifierGenerator(length=settings.identifier_length)
    app.state.settings = settings
    app.state.identifiers = identifiers
    app.state.article_store = JsonArticleStore(settings.data_file)
    app.state.upload_storage = LocalUploadStorage(
        upload_dir=settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
        identifiers=identifiers,
    )

    app.middleware("http")(log_requests)

    app.include_router(api_router)
    app.include_router(pages_router)

    # Static files: uploaded images and, when installed, the TinyMCE bundle
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=upload_dir), name="uploads")

    tinymce_dir = Path(settings.tinymce_dir)
    if tinymce_dir.is_dir():
        app.mount("/tinymce", StaticFiles(directory=tinymce_dir), name="tinymce")
    else:
        logger.warning("TinyMCE directory not found; editor assets will not be served",
                       extra={"path": str(tinymce_dir)})

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tinypress.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
