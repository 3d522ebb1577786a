import pytest

from conftest import make_feed, make_item
from media_feed.extract import extract_entry, find_cover, first_value, normalize_date
from media_feed.feed import feed_items, parse_feed


def _parsed_item(**overrides):
    return feed_items(parse_feed(make_feed(make_item(**overrides))))[0]


def test_first_value_handles_lists_scalars_and_attributes():
    item = {
        "title": ["Heat"],
        "guid": [{"$": {"isPermaLink": "false"}, "_": "watch-1"}],
        "year": 1995,
        "empty": [""],
        "none": [],
    }
    assert first_value(item, "title") == "Heat"
    assert first_value(item, "guid") == "watch-1"
    assert first_value(item, "year") == "1995"
    assert first_value(item, "empty", "fallback") == "fallback"
    assert first_value(item, "none", "fallback") == "fallback"
    assert first_value(item, "missing") == ""
    assert first_value("not a mapping", "title", "x") == "x"


def test_extract_entry_reads_all_fields():
    entry = extract_entry(_parsed_item())

    assert entry.id == "letterboxd-watch-123"
    assert entry.watched_date == "2024-03-05"
    assert entry.link == "https://letterboxd.com/funkylarma/film/the-matrix-reloaded/"
    assert entry.title == "The Matrix: Reloaded!"
    assert entry.cover == "https://a.ltrbxd.com/poster.jpg"
    assert entry.author == "funkylarma"
    assert "<em>Tuesday</em>" in entry.description


def test_extract_entry_tolerates_missing_fields():
    entry = extract_entry(
        _parsed_item(guid=None, creator=None, description="<p>No poster.</p>")
    )

    assert entry.id == ""
    assert entry.author == "Unknown Author"
    assert entry.cover is None


def test_extract_entry_never_raises_on_empty_item():
    entry = extract_entry({})
    assert entry.title == ""
    assert entry.description == ""
    assert entry.author == "Unknown Author"


def test_find_cover_uses_first_src():
    html = '<img src="https://a/first.jpg"><img src="https://a/second.jpg">'
    assert find_cover(html) == "https://a/first.jpg"
    assert find_cover("<p>text only</p>") is None
    assert find_cover("") is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-03-05", "2024-03-05"),
        ("5 March 2024", "2024-03-05"),
        ("Tue, 05 Mar 2024 21:15:00 +1300", "2024-03-05"),
    ],
)
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("2024", "2024-01-01"), ("March 2024", "2024-03-01"), ("March 5", "2000-03-05")],
)
def test_normalize_date_fills_missing_parts_independently_of_today(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["", "not a date"])
def test_normalize_date_rejects_garbage(raw):
    with pytest.raises(ValueError):
        normalize_date(raw)
