"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from tinypress.domain.entities import Article


class PersistStatus(str, Enum):
    """Outcome of a snapshot load or write."""

    OK = "ok"
    MISSING = "missing"
    IO_FAILURE = "io_failure"
    DECODE_FAILURE = "decode_failure"


@dataclass(frozen=True)
class PersistResult:
    """Result value reported by load/persist instead of raising."""

    status: PersistStatus
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is PersistStatus.OK


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    def get(self, article_id: str) -> Article | None:
        """Return the article with this id, or None when absent."""
        ...

    @abstractmethod
    def put(self, article: Article) -> PersistResult:
        """Insert or replace the article stored under ``article.id``."""
        ...

    @abstractmethod
    def list(self) -> list[Article]:
        """Return every article, most recently created first."""
        ...

    @abstractmethod
    def __contains__(self, article_id: object) -> bool:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...
