"""Article repository backed by an in-memory dict mirrored to a single JSON file.

Snapshot layout::

    {
      "ab12CD34": {
        "id": "ab12CD34",
        "title": "Hello",
        "content": "<p>Hi</p>",
        "createdAt": "2024-05-01T12:00:00Z"
      }
    }

Every ``put`` rewrites the whole file while the store lock is held, so the cost
of a write grows with the number of stored articles.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from tinypress.application.interfaces import ArticleRepository, PersistResult, PersistStatus
from tinypress.domain.entities import Article

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ArticleRecord(BaseModel):
    """On-disk representation of an article (lowerCamel field names)."""

    id: str
    title: str
    content: str
    created_at: datetime = Field(default=_EPOCH, alias="createdAt")

    model_config = {"populate_by_name": True}

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_entity(cls, article: Article) -> "ArticleRecord":
        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            created_at=article.created_at,
        )

    def to_entity(self) -> Article:
        return Article(
            id=self.id,
            title=self.title,
            content=self.content,
            created_at=self.created_at,
        )


_SNAPSHOT_ADAPTER = TypeAdapter(dict[str, ArticleRecord])


class JsonArticleStore(ArticleRepository):
    """Implements the ArticleRepository port with a lock-guarded dict and a JSON snapshot."""

    def __init__(self, file_path: str | Path):
        self._file_path = Path(file_path)
        self._articles: dict[str, Article] = {}
        self._lock = threading.Lock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    # ── Reads ───────────────────────────────────────────────────────

    def get(self, article_id: str) -> Article | None:
        with self._lock:
            return self._articles.get(article_id)

    def list(self) -> list[Article]:
        with self._lock:
            snapshot = list(self._articles.values())
        return sorted(snapshot, key=lambda a: a.created_at, reverse=True)

    def __contains__(self, article_id: object) -> bool:
        with self._lock:
            return article_id in self._articles

    def __len__(self) -> int:
        with self._lock:
            return len(self._articles)

    # ── Writes ──────────────────────────────────────────────────────

    def put(self, article: Article) -> PersistResult:
        """Insert or replace an article and rewrite the snapshot.

        The in-memory change is kept even when the write fails; the failure is
        reported through the returned PersistResult.
        """
        with self._lock:
            self._articles[article.id] = article
            return self._persist_locked()

    def persist(self) -> PersistResult:
        """Write the whole collection to the snapshot file."""
        with self._lock:
            return self._persist_locked()

    def _persist_locked(self) -> PersistResult:
        """Snapshot write; the caller holds the store lock."""
        payload = {
            article_id: ArticleRecord.from_entity(article).model_dump(mode="json", by_alias=True)
            for article_id, article in self._articles.items()
        }
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._file_path.open("w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
                fh.write("\n")
        except OSError as exc:
            logger.error(
                "Failed to save articles",
                extra={"path": str(self._file_path), "error": str(exc)},
            )
            return PersistResult(PersistStatus.IO_FAILURE, str(exc))

        logger.info(
            "Articles saved",
            extra={"path": str(self._file_path), "count": len(payload)},
        )
        return PersistResult(PersistStatus.OK)

    def load(self) -> PersistResult:
        """Replace the in-memory collection with the snapshot on disk.

        A missing file is the normal first-run condition. On any read or decode
        failure the collection is left empty.
        """
        with self._lock:
            self._articles = {}
            try:
                raw = self._file_path.read_bytes()
            except FileNotFoundError:
                logger.warning(
                    "No saved articles found",
                    extra={"path": str(self._file_path)},
                )
                return PersistResult(PersistStatus.MISSING)
            except OSError as exc:
                logger.error(
                    "Failed to read articles",
                    extra={"path": str(self._file_path), "error": str(exc)},
                )
                return PersistResult(PersistStatus.IO_FAILURE, str(exc))

            try:
                records = _SNAPSHOT_ADAPTER.validate_json(raw)
            except (ValidationError, UnicodeDecodeError) as exc:
                logger.error(
                    "Failed to decode articles",
                    extra={"path": str(self._file_path), "error": type(exc).__name__},
                )
                return PersistResult(PersistStatus.DECODE_FAILURE, str(exc))

            self._articles = {key: record.to_entity() for key, record in records.items()}
            logger.info(
                "Articles loaded",
                extra={"path": str(self._file_path), "count": len(self._articles)},
            )
            return PersistResult(PersistStatus.OK)
