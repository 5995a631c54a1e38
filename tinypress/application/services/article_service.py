"""Application service (use case) for Article operations."""

import logging
from datetime import datetime, timezone

from tinypress.application.interfaces import ArticleRepository
from tinypress.application.schemas import ArticleCreate
from tinypress.domain.entities import Article
from tinypress.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidIdentifierError,
)
from tinypress.infrastructure.identifiers import IdentifierGenerator

logger = logging.getLogger(__name__)

# Upper bound on attempts to find an unused id.
_MAX_ID_ATTEMPTS = 32


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository, identifiers: IdentifierGenerator):
        self._repository = repository
        self._identifiers = identifiers

    def issue_draft_id(self) -> str:
        """Return a fresh id that no stored article uses yet."""
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._identifiers.generate()
            if candidate not in self._repository:
                return candidate
        raise RuntimeError("Could not generate an unused article id")

    def get_article(self, article_id: str) -> Article:
        article = self._repository.get(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    def list_articles(self) -> list[Article]:
        return self._repository.list()

    def create_article(self, data: ArticleCreate, draft_id: str | None = None) -> Article:
        """Create and store a new article.

        ``draft_id`` is the id handed out by the create form (uploads for the
        article are already filed under it). It is only accepted when it is
        well-formed and not in use, so an existing article cannot be replaced
        from outside.
        """
        if draft_id:
            if not self._identifiers.is_valid(draft_id):
                raise InvalidIdentifierError(draft_id)
            if draft_id in self._repository:
                raise DuplicateEntityError("Article", "id", draft_id)
            article_id = draft_id
        else:
            article_id = self.issue_draft_id()

        article = Article(
            id=article_id,
            title=data.title,
            content=data.content,
            created_at=datetime.now(timezone.utc),
        )
        result = self._repository.put(article)
        if not result.ok:
            logger.error(
                "Article stored in memory but not on disk",
                extra={"article_id": article.id, "status": result.status.value},
            )
        else:
            logger.info("Article created", extra={"article_id": article.id})
        return article
