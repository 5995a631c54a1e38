"""Health check endpoint — always available."""

from fastapi import APIRouter, Depends

from tinypress.config import Settings
from tinypress.infrastructure.dependencies import get_app_settings, get_article_store
from tinypress.infrastructure.storage.json_article_store import JsonArticleStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    settings: Settings = Depends(get_app_settings),
    store: JsonArticleStore = Depends(get_article_store),
) -> dict:
    """Returns the current application health status."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "articles": len(store),
    }
