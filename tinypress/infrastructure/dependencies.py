"""FastAPI dependency injection — wires infrastructure to application layer.

The store, upload storage and identifier generator are built once by
``create_app`` and kept on ``app.state``; these providers hand them to handlers.
"""

from fastapi import Depends, Request

from tinypress.application.services import ArticleService
from tinypress.config import Settings
from tinypress.infrastructure.identifiers import IdentifierGenerator
from tinypress.infrastructure.storage.json_article_store import JsonArticleStore
from tinypress.infrastructure.storage.upload_storage import LocalUploadStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_article_store(request: Request) -> JsonArticleStore:
    return request.app.state.article_store


def get_identifier_generator(request: Request) -> IdentifierGenerator:
    return request.app.state.identifiers


def get_upload_storage(request: Request) -> LocalUploadStorage:
    return request.app.state.upload_storage


def get_article_service(
    store: JsonArticleStore = Depends(get_article_store),
    identifiers: IdentifierGenerator = Depends(get_identifier_generator),
) -> ArticleService:
    """Provides an ArticleService bound to the application's article store."""
    return ArticleService(store, identifiers)
