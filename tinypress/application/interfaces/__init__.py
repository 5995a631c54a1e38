from .article_repository import ArticleRepository, PersistResult, PersistStatus

__all__ = [
    "ArticleRepository",
    "PersistResult",
    "PersistStatus",
]
