from __future__ import annotations

from datetime import datetime
from pathlib import Path

from fastapi.templating import Jinja2Templates
from markupsafe import Markup, escape

_dir = Path(__file__).resolve().parent.parent / "templates"


def hhmm(value: datetime) -> str:
    """Format a timestamp the way id-ID locales show short times (14.05)."""
    return value.strftime("%H.%M")


templates = Jinja2Templates(directory=_dir)
templates.env.filters["nl2br"] = lambda v: Markup(escape(v).replace("\n", Markup("<br>\n")))
templates.env.filters["hhmm"] = hhmm
