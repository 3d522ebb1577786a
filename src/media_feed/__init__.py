"""Convert a Letterboxd-style RSS diary feed into dated Markdown files."""

__all__ = ["config", "models", "pipeline"]
