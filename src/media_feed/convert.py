"""HTML to Markdown conversion for entry descriptions."""

from markdownify import markdownify as md

BULLET_MARKER = "-"


def html_to_markdown(html: str) -> str:
    """Convert HTML to Markdown with fenced code blocks and ``-`` bullets."""
    if not html:
        return ""
    return md(html, bullets=BULLET_MARKER, code_language="").strip()
