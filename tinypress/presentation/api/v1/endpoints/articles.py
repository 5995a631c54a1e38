"""Article endpoints — read and create; articles are never edited or deleted."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from tinypress.application.schemas import ArticleCreateRequest, ArticleResponse
from tinypress.application.services import ArticleService
from tinypress.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidIdentifierError,
)
from tinypress.infrastructure.dependencies import get_article_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=list[ArticleResponse])
def list_articles(
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Retrieve all articles, newest first."""
    return [ArticleResponse.model_validate(a, from_attributes=True) for a in service.list_articles()]


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve a single article by ID."""
    try:
        article = service.get_article(article_id)
    except EntityNotFoundError as e:
        logger.warning("Article not found", extra={"article_id": article_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
def create_article(
    data: ArticleCreateRequest,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article. ``id`` may echo a draft id; otherwise one is generated."""
    try:
        article = service.create_article(data, draft_id=data.id)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)
