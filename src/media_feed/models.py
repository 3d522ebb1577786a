"""Data models for the feed-to-Markdown pipeline."""

from typing import Optional

from pydantic import BaseModel, Field

UNKNOWN_AUTHOR = "Unknown Author"


class FeedEntry(BaseModel):
    """Fields pulled from one feed item; lives only for a single run."""

    id: str = ""
    watched_date: str = Field("", description="Raw watched date as found in the feed.")
    link: str = ""
    title: str = ""
    description: str = Field("", description="HTML body of the entry.")
    cover: Optional[str] = Field(
        None, description="First image src found in the description, if any."
    )
    author: str = UNKNOWN_AUTHOR


class RenderedEntry(BaseModel):
    """Filled template plus the values needed to place it on disk."""

    output: str
    date: str = Field(..., description="Watched date as yyyy-MM-dd.")
    title: str
