"""Feed-to-Markdown pipeline.

One run walks a single feed:
- fetch + parse (failures end the run for that feed)
- per entry: extract, convert HTML, render the template, write the file

Entry failures are logged and recorded, never raised, so one bad entry
does not stop the rest. Injected ``fetch_fn`` allows offline use in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional

from .config import Settings, get_settings
from .convert import html_to_markdown
from .extract import extract_entry
from .feed import FetchError, ParseError, feed_items, fetch_feed, parse_feed
from .render import render_entry
from .writer import save_markdown

logger = logging.getLogger(__name__)

STATUS_WRITTEN = "written"
STATUS_EXISTS = "exists"
STATUS_FAILED = "failed"


class EntryError(RuntimeError):
    """Processing one feed entry failed."""

    def __init__(self, message: str, index: int, title: str = ""):
        super().__init__(message)
        self.index = index
        self.title = title


# --- Data containers -------------------------------------------------------

@dataclass
class EntryOutcome:
    index: int
    title: str
    status: str
    path: Path | None = None
    error: str | None = None


@dataclass
class FeedReport:
    url: str
    outcomes: List[EntryOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def written(self) -> int:
        return sum(1 for o in self.outcomes if o.status == STATUS_WRITTEN)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == STATUS_EXISTS)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == STATUS_FAILED)


# --- Steps ----------------------------------------------------------------

def process_entry(item: Any, settings: Settings, index: int = 0) -> EntryOutcome:
    """Turn one feed item into a Markdown file; raises EntryError on any failure."""
    title = ""
    try:
        entry = extract_entry(item)
        title = entry.title
        markdown = html_to_markdown(entry.description)
        rendered = render_entry(entry, markdown, settings.template_path)
        result = save_markdown(
            settings.output_dir, rendered.date, rendered.title, rendered.output
        )
    except Exception as exc:
        raise EntryError(f"{type(exc).__name__}: {exc}", index, title) from exc

    if result.created:
        logger.info("Markdown file '%s' created.", result.path)
    return EntryOutcome(
        index=index,
        title=title,
        status=STATUS_WRITTEN if result.created else STATUS_EXISTS,
        path=result.path,
    )


def _default_fetch(settings: Settings) -> Callable[[str], Any]:
    def fetch(url: str) -> Any:
        return fetch_feed(url, timeout=settings.feed_timeout)

    return fetch


def process_feed(
    url: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
    fetch_fn: Optional[Callable[[str], Any]] = None,
) -> FeedReport:
    """
    Convert every entry of one feed into Markdown files.

    Never raises for feed or entry failures: a fetch/parse failure is
    recorded on ``FeedReport.error``, entry failures as failed outcomes.
    """
    settings = settings or get_settings()
    url = url or settings.feed_url
    fetch_fn = fetch_fn or _default_fetch(settings)
    report = FeedReport(url=url)

    try:
        data = parse_feed(fetch_fn(url))
    except (FetchError, ParseError) as exc:
        logger.error("Error processing feed at %s: %s", url, exc)
        report.error = str(exc)
        return report

    items = feed_items(data)
    logger.info("Found %d entries in %s", len(items), url)

    for index, item in enumerate(items):
        try:
            outcome = process_entry(item, settings, index=index)
        except EntryError as exc:
            logger.error(
                "Error processing feed entry %d (%s) for %s: %s",
                index,
                exc.title or "untitled",
                url,
                exc,
            )
            outcome = EntryOutcome(
                index=index, title=exc.title, status=STATUS_FAILED, error=str(exc)
            )
        report.outcomes.append(outcome)

    logger.info(
        "Feed complete: %d written, %d already present, %d failed",
        report.written,
        report.skipped,
        report.failed,
    )
    return report
