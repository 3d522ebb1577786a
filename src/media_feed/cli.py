"""Command-line entry point for the feed-to-Markdown pipeline."""

import dataclasses
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import typer
from rich import print as rprint

from .config import get_settings
from .logging_config import setup_logging
from .pipeline import FeedReport, process_feed

app = typer.Typer(
    help="Convert an RSS diary feed into dated Markdown files."
)


def _to_plain(value: Any) -> Any:
    """
    Convert dataclasses, Paths, and date-like objects into JSON-serializable primitives.
    """
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value):
        return _to_plain(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_plain(item) for item in value]
    return value


def _report_payload(report: FeedReport) -> dict:
    payload = _to_plain(report)
    payload["written"] = report.written
    payload["skipped"] = report.skipped
    payload["failed"] = report.failed
    return payload


def _write_report(out_path: Path, report: FeedReport) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        json.dumps(_report_payload(report), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


@app.command()
def run(
    url: Optional[str] = typer.Argument(
        None, help="Feed URL. Defaults to FEED_URL from the environment."
    ),
    template: Optional[Path] = typer.Option(
        None,
        "--template",
        "-t",
        help="Template file with [ID], [DATE], [LINK], [TITLE], [COVER], [MARKDOWN], [AUTHOR].",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output root for <year>/<month>/<slug>.md files.",
    ),
    report_path: Optional[Path] = typer.Option(
        None,
        "--report",
        help="Optional path to write a JSON report of every entry outcome.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
):
    """
    Fetch the feed once and write one Markdown file per entry.

    Existing files are left untouched. Exits with code 1 only when the feed
    itself cannot be fetched or parsed.
    """
    settings = get_settings()
    overrides = {}
    if template is not None:
        overrides["template_path"] = str(template)
    if out is not None:
        overrides["output_dir"] = str(out)
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings.log_level, verbose=verbose)

    report = process_feed(url, settings=settings)

    if report_path:
        _write_report(report_path, report)
        rprint(f"[cyan]Wrote report to {report_path}[/cyan]")

    if not report.ok:
        rprint(f"[red]Failed {report.url}: {report.error}[/red]")
        raise typer.Exit(code=1)

    for outcome in report.outcomes:
        if outcome.error:
            rprint(f"[red]Failed entry {outcome.index} ({outcome.title}): {outcome.error}[/red]")

    rprint(
        f"[green]{report.written} written[/green], "
        f"[cyan]{report.skipped} already present[/cyan], "
        f"[red]{report.failed} failed[/red]."
    )


def main():
    app()


if __name__ == "__main__":
    main()
