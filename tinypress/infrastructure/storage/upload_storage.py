"""Local filesystem storage for images uploaded from the article editor.

Storage layout:
    <upload_dir>/<article_id>/<filename>    — served at /uploads/<article_id>/<filename>
"""

import logging
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

from tinypress.domain.exceptions import InvalidIdentifierError, UploadTooLargeError
from tinypress.infrastructure.identifiers import IdentifierGenerator

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


@dataclass
class StoredUpload:
    """Result of storing a single upload on disk."""

    stored_path: str
    filename: str
    url: str
    file_size: int
    mime_type: str


def _sanitise(name: str, max_len: int = 120) -> str:
    """Keep the base name only, replacing anything outside ``[\\w.-]`` with underscores."""
    base = Path(name.replace("\\", "/")).name
    cleaned = re.sub(r"[^\w.\-]", "_", base)[:max_len].lstrip(".")
    return cleaned or "unnamed"


class LocalUploadStorage:
    """Infrastructure adapter that files uploads under a per-article directory."""

    def __init__(
        self,
        upload_dir: str | Path,
        max_bytes: int,
        identifiers: IdentifierGenerator | None = None,
    ):
        self._upload_dir = Path(upload_dir)
        self._max_bytes = max_bytes
        self._identifiers = identifiers or IdentifierGenerator()

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def store_upload(self, article_id: str, filename: str, content: bytes) -> StoredUpload:
        """Write ``content`` to ``<upload_dir>/<article_id>/<filename>``.

        An existing file with the same name is overwritten.
        """
        if not self._identifiers.is_valid(article_id):
            raise InvalidIdentifierError(article_id)
        if len(content) > self._max_bytes:
            raise UploadTooLargeError(len(content), self._max_bytes)

        safe_name = _sanitise(filename)
        article_dir = self._upload_dir / article_id
        article_dir.mkdir(parents=True, exist_ok=True)

        dest_path = article_dir / safe_name
        dest_path.write_bytes(content)

        mime_type = mimetypes.guess_type(safe_name)[0] or "application/octet-stream"

        logger.info(
            "Stored upload",
            extra={"article_id": article_id, "path": str(dest_path), "bytes": len(content)},
        )

        return StoredUpload(
            stored_path=str(dest_path),
            filename=safe_name,
            url=f"{UPLOADS_URL_PREFIX}/{article_id}/{safe_name}",
            file_size=len(content),
            mime_type=mime_type,
        )
