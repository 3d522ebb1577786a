"""Place rendered entries under ``<root>/<YYYY>/<MM>/<slug>.md``."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 50
_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^\w-]")
# Device names Windows refuses as file stems.
RESERVED_STEMS = frozenset(
    ["con", "prn", "aux", "nul"]
    + [f"com{n}" for n in range(1, 10)]
    + [f"lpt{n}" for n in range(1, 10)]
)


@dataclass
class WriteResult:
    path: Path
    created: bool


def slugify_title(title: str) -> str:
    """
    Lowercase, hyphenate whitespace, strip unsafe characters, cap at 50 chars.

    Raises ValueError if nothing usable is left or the slug is a reserved
    device name.
    """
    slug = _WHITESPACE.sub("-", (title or "").lower())
    slug = _UNSAFE.sub("", slug)[:SLUG_MAX_LENGTH]
    if not slug.strip("-_"):
        raise ValueError(f"Title {title!r} does not produce a usable filename.")
    if slug in RESERVED_STEMS:
        raise ValueError(f"Title {title!r} maps to reserved filename {slug!r}.")
    return slug


def destination_path(root: Path | str, date_text: str, title: str) -> Path:
    day = date.fromisoformat(date_text)
    return (
        Path(root)
        / f"{day.year:04d}"
        / f"{day.month:02d}"
        / f"{slugify_title(title)}.md"
    )


def _ensure_dir(path: Path) -> None:
    if path.is_dir():
        return
    path.mkdir(parents=True, exist_ok=True)
    logger.info("Output directory '%s' created.", path)


def save_markdown(
    root: Path | str, date_text: str, title: str, document: str
) -> WriteResult:
    """Write ``document`` unless a file already sits at its destination."""
    path = destination_path(root, date_text, title)
    _ensure_dir(path.parent.parent)
    _ensure_dir(path.parent)

    if path.exists():
        logger.info("File %s already exists", path)
        return WriteResult(path=path, created=False)

    logger.info("Writing %s", path)
    try:
        with path.open("x", encoding="utf-8") as handle:
            handle.write(document)
    except FileExistsError:
        logger.info("File %s already exists", path)
        return WriteResult(path=path, created=False)
    return WriteResult(path=path, created=True)
