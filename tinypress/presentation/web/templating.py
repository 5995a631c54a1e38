"""Jinja2 environment for the HTML pages."""

from datetime import datetime
from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def format_date(value: datetime) -> str:
    """Render a timestamp as e.g. ``January 2, 2006 at 15:04``."""
    return f"{value:%B} {value.day}, {value:%Y} at {value:%H:%M}"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["format_date"] = format_date
