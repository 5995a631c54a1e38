"""Centralized logging configuration.

Applies per-category log levels from Settings and, when ``log_file`` is set,
writes one JSON object per record to that file so key-value ``extra=`` fields
survive for later inspection.

Usage:
    from tinypress.infrastructure.logging.log_config import setup_logging
    setup_logging(settings)   # Call once at startup (in the FastAPI lifespan)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from tinypress.config import Settings, get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_store": [
        "tinypress.infrastructure.storage",
    ],
}

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_FILE_HANDLER_NAME = "tinypress-file"


def record_extras(record: logging.LogRecord) -> dict[str, object]:
    """Return the key-value fields attached to a record via ``extra=``."""
    return {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}


class JsonLogFormatter(logging.Formatter):
    """Formats records as single-line JSON with RFC 3339 timestamps."""

    def __init__(self, static_fields: dict[str, str] | None = None):
        super().__init__()
        self._static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(self._static_fields)
        entry.update(record_extras(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """Console formatter that appends ``extra=`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging from application settings.

    Call this once during startup (e.g. in the FastAPI lifespan).
    """
    settings = settings or get_settings()
    root_level = _parse_level(settings.log_level)

    # ── Root logger ────────────────────────────────────────────────
    root = logging.getLogger()
    root.setLevel(root_level)

    # Ensure at least one console handler exists (uvicorn usually adds one,
    # but when running tests or scripts it may not).
    if not any(h.get_name() != _FILE_HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(KeyValueFormatter("%(levelname)-8s %(name)s — %(message)s"))
        root.addHandler(handler)

    # ── Log file ───────────────────────────────────────────────────
    for existing in [h for h in root.handlers if h.get_name() == _FILE_HANDLER_NAME]:
        root.removeHandler(existing)
        existing.close()

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER_NAME)
        if settings.log_json:
            file_handler.setFormatter(
                JsonLogFormatter({"service": settings.app_title, "version": settings.app_version})
            )
        else:
            file_handler.setFormatter(
                KeyValueFormatter("%(asctime)s %(levelname)-8s %(name)s — %(message)s")
            )
        root.addHandler(file_handler)

    # ── Per-category loggers ───────────────────────────────────────
    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logger initialized",
        extra={"service": settings.app_title, "version": settings.app_version},
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
