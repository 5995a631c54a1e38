"""HTML pages — create form, single article, overview, and editor image upload."""

import logging
from dataclasses import dataclass
from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from markupsafe import Markup

from tinypress.application.schemas import ArticleCreate, UploadResponse
from tinypress.application.services import ArticleService
from tinypress.domain.entities import Article
from tinypress.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidIdentifierError,
    UploadTooLargeError,
)
from tinypress.infrastructure.dependencies import get_article_service, get_upload_storage
from tinypress.infrastructure.storage.upload_storage import LocalUploadStorage
from tinypress.presentation.web.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@dataclass
class ViewArticle:
    """Article projection for templates; ``content`` is trusted markup and rendered as-is."""

    id: str
    title: str
    content: Markup
    created_at: datetime

    @classmethod
    def from_article(cls, article: Article) -> "ViewArticle":
        return cls(
            id=article.id,
            title=article.title,
            content=Markup(article.content),
            created_at=article.created_at,
        )


def _error(message: str, status_code: int) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


@router.get("/")
def create_form(
    request: Request,
    service: ArticleService = Depends(get_article_service),
) -> Response:
    """Show the editor with a freshly issued article id."""
    return templates.TemplateResponse(request, "create.html", {"id": service.issue_draft_id()})


@router.post("/")
def create_article(
    article_id: str | None = Form(None, alias="id"),
    title: str = Form(""),
    content: str = Form(""),
    service: ArticleService = Depends(get_article_service),
) -> Response:
    if not title.strip():
        logger.warning("Create rejected: missing title", extra={"article_id": article_id})
        return _error("Missing title", status.HTTP_400_BAD_REQUEST)
    try:
        article = service.create_article(ArticleCreate(title=title, content=content), draft_id=article_id)
    except InvalidIdentifierError:
        logger.warning("Create rejected: invalid id", extra={"article_id": article_id})
        return _error("Invalid ID", status.HTTP_400_BAD_REQUEST)
    except DuplicateEntityError:
        logger.warning("Create rejected: id already in use", extra={"article_id": article_id})
        return _error("Article already exists", status.HTTP_409_CONFLICT)
    return RedirectResponse(f"/article?id={article.id}", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/article")
def view_article(
    request: Request,
    article_id: str | None = Query(None, alias="id"),
    service: ArticleService = Depends(get_article_service),
) -> Response:
    if not article_id:
        logger.warning("Article requested without id")
        return _error("Missing ID", status.HTTP_400_BAD_REQUEST)
    try:
        article = service.get_article(article_id)
    except EntityNotFoundError:
        logger.warning("Article not found", extra={"article_id": article_id})
        return _error("Article not found", status.HTTP_404_NOT_FOUND)
    return templates.TemplateResponse(
        request, "article.html", {"article": ViewArticle.from_article(article)}
    )


@router.get("/overview")
def overview(
    request: Request,
    service: ArticleService = Depends(get_article_service),
) -> Response:
    """All articles, newest first."""
    articles = [ViewArticle.from_article(a) for a in service.list_articles()]
    return templates.TemplateResponse(request, "overview.html", {"articles": articles})


@router.post("/upload")
def upload_image(
    article_id: str | None = Query(None, alias="id"),
    file: UploadFile | None = File(None),
    storage: LocalUploadStorage = Depends(get_upload_storage),
) -> Response:
    """Store an editor image under the article's upload directory.

    The article does not have to exist yet: the editor uploads images while the
    draft is still being written.
    """
    if not article_id:
        logger.warning("Upload without id")
        return _error("Missing ID", status.HTTP_400_BAD_REQUEST)
    if file is None or not file.filename:
        logger.warning("Upload without file", extra={"article_id": article_id})
        return _error("Error retrieving the file", status.HTTP_400_BAD_REQUEST)

    # Read one byte past the limit so oversized uploads are detected without buffering them whole.
    content = file.file.read(storage.max_bytes + 1)
    try:
        stored = storage.store_upload(article_id, file.filename, content)
    except InvalidIdentifierError:
        logger.warning("Upload rejected: invalid id", extra={"article_id": article_id})
        return _error("Invalid ID", status.HTTP_400_BAD_REQUEST)
    except UploadTooLargeError:
        logger.warning("Upload rejected: too large", extra={"article_id": article_id})
        return _error("File too large", status.HTTP_400_BAD_REQUEST)
    except OSError:
        logger.exception("Unable to save upload", extra={"article_id": article_id})
        return _error("Unable to save the file", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return JSONResponse(UploadResponse(location=stored.url).model_dump())
