"""Fill the entry template with extracted values."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict

from .extract import normalize_date
from .models import FeedEntry, RenderedEntry

TITLE_STRIP_PATTERN = re.compile(r"[^\w\s-]")


def clean_title(title: str) -> str:
    """Drop everything except word characters, whitespace and hyphens."""
    return TITLE_STRIP_PATTERN.sub("", title or "")


def load_template(path: Path | str) -> str:
    """Read the template; called for every entry so edits apply mid-run."""
    return Path(path).read_text(encoding="utf-8")


def fill_template(template: str, values: Dict[str, str]) -> str:
    """Replace every ``[KEY]`` occurrence, in insertion order of ``values``."""
    output = template
    for key, value in values.items():
        output = output.replace(f"[{key}]", value or "")
    return output


def render_entry(
    entry: FeedEntry, markdown: str, template_path: Path | str
) -> RenderedEntry:
    """
    Render one entry into the template.

    The watched date is normalized first, so an unparseable date fails
    before anything is written.
    """
    date = normalize_date(entry.watched_date)
    template = load_template(template_path)
    output = fill_template(
        template,
        {
            "ID": entry.id,
            "DATE": date,
            "LINK": entry.link,
            "TITLE": clean_title(entry.title),
            "COVER": entry.cover or "",
            "MARKDOWN": markdown,
            "AUTHOR": entry.author,
        },
    )
    return RenderedEntry(output=output, date=date, title=entry.title)
