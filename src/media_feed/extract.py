"""Pull the fields we render out of one normalized feed item."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as date_parser

from .feed import TEXT_KEY
from .models import UNKNOWN_AUTHOR, FeedEntry

logger = logging.getLogger(__name__)

# Source of any date part the feed leaves out.
DATE_DEFAULT = datetime(2000, 1, 1)

COVER_PATTERN = re.compile(r'src="([^"]+)"')

GUID_FIELD = "guid"
WATCHED_DATE_FIELD = "letterboxd:watchedDate"
LINK_FIELD = "link"
TITLE_FIELD = "letterboxd:filmTitle"
DESCRIPTION_FIELD = "description"
AUTHOR_FIELD = "dc:creator"


def first_value(item: Any, key: str, default: str = "") -> str:
    """
    Return the first value stored under ``key`` as text, or ``default``.

    Accepts both list-valued fields (parsed markup) and scalar fields
    (JSON feeds). Elements that carried attributes contribute their text.
    Empty values fall back to ``default`` as well.
    """
    if not isinstance(item, dict):
        return default
    value = item.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
    if value is None:
        return default
    if not isinstance(value, str):
        value = str(value)
    return value or default


def find_cover(html: str) -> Optional[str]:
    """Return the first ``src="..."`` value in the HTML, if any."""
    match = COVER_PATTERN.search(html or "")
    if match is None:
        return None
    return match.group(1)


def extract_entry(item: Any) -> FeedEntry:
    description = first_value(item, DESCRIPTION_FIELD)
    cover = find_cover(description)
    logger.debug("Cover image: %s", cover)
    return FeedEntry(
        id=first_value(item, GUID_FIELD),
        watched_date=first_value(item, WATCHED_DATE_FIELD),
        link=first_value(item, LINK_FIELD).strip(),
        title=first_value(item, TITLE_FIELD),
        description=description,
        cover=cover,
        author=first_value(item, AUTHOR_FIELD, UNKNOWN_AUTHOR),
    )


def normalize_date(raw: str) -> str:
    """
    Reformat a watched date as ``yyyy-MM-dd``.

    Missing parts come from DATE_DEFAULT, so "2024" is always 2024-01-01.
    Raises ValueError when the text does not contain a date.
    """
    return date_parser.parse(raw, default=DATE_DEFAULT).date().isoformat()
