from pathlib import Path

import pytest

from media_feed.config import Settings

TEMPLATE = (
    "---\n"
    "id: [ID]\n"
    'title: "[TITLE]"\n'
    "date: [DATE]\n"
    "link: [LINK]\n"
    "cover: [COVER]\n"
    "author: [AUTHOR]\n"
    "---\n"
    "\n"
    "# [TITLE]\n"
    "\n"
    "[MARKDOWN]\n"
)

FEED_HEADER = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/"'
    ' xmlns:letterboxd="https://letterboxd.com">\n'
    "<channel>\n"
    "<title>Letterboxd - funkylarma</title>\n"
)
FEED_FOOTER = "</channel>\n</rss>\n"


def make_item(
    title="The Matrix: Reloaded!",
    watched="2024-03-05",
    guid="letterboxd-watch-123",
    link="  https://letterboxd.com/funkylarma/film/the-matrix-reloaded/  ",
    creator="funkylarma",
    description=(
        '<p><img src="https://a.ltrbxd.com/poster.jpg"/></p>'
        "<p>Watched on <em>Tuesday</em>.</p>"
    ),
):
    """Build one <item>; pass None to leave a field out."""
    parts = ["<item>"]
    if guid is not None:
        parts.append(f'<guid isPermaLink="false">{guid}</guid>')
    if link is not None:
        parts.append(f"<link>{link}</link>")
    if watched is not None:
        parts.append(f"<letterboxd:watchedDate>{watched}</letterboxd:watchedDate>")
    if title is not None:
        parts.append(f"<letterboxd:filmTitle>{title}</letterboxd:filmTitle>")
    if description is not None:
        parts.append(f"<description><![CDATA[{description}]]></description>")
    if creator is not None:
        parts.append(f"<dc:creator>{creator}</dc:creator>")
    parts.append("</item>")
    return "".join(parts)


def make_feed(*items):
    return FEED_HEADER + "\n".join(items) + FEED_FOOTER


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    path = tmp_path / "includes" / "templates" / "letterboxd.md"
    path.parent.mkdir(parents=True)
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, template_path: Path) -> Settings:
    return Settings(
        feed_url="https://letterboxd.com/funkylarma/rss/",
        template_path=str(template_path),
        output_dir=str(tmp_path / "src" / "media"),
    )
