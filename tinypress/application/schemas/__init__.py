from .article import ArticleCreate, ArticleCreateRequest, ArticleResponse, UploadResponse

__all__ = [
    "ArticleCreate",
    "ArticleCreateRequest",
    "ArticleResponse",
    "UploadResponse",
]
