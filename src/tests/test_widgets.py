from __future__ import annotations

from datetime import datetime

import pytest

from newsfeed_tui.datamodels import NewsItem
from newsfeed_tui.screens import item_markdown
from newsfeed_tui.widgets import format_timestamp


def test_format_timestamp_missing():
    assert format_timestamp(None) == "—"
    assert format_timestamp("") == "—"


def test_format_timestamp_naive():
    assert format_timestamp("2024-05-01T10:30:00") == "01 May 2024, 10:30"


def test_format_timestamp_utc_converted_to_local():
    expected = (
        datetime.fromisoformat("2024-05-01T10:30:00+00:00")
        .astimezone()
        .strftime("%d %b %Y, %H:%M")
    )
    assert format_timestamp("2024-05-01T10:30:00Z") == expected


@pytest.mark.parametrize("value", ["yesterday", "2024-13-45"])
def test_format_timestamp_unparsable_returned_as_is(value):
    assert format_timestamp(value) == value


def test_item_markdown_includes_link_and_description():
    md = item_markdown(
        NewsItem(title="A", link="http://x/1", description="foo", image_url="http://x/1.jpg")
    )
    assert md.startswith("# A")
    assert "foo" in md
    assert "(http://x/1)" in md
    assert "http://x/1.jpg" in md


def test_item_markdown_without_optional_fields():
    md = item_markdown(NewsItem(title="", link="http://x/1"))
    assert md.startswith("# Untitled")
    assert "Image" not in md


def test_format_timestamp_nanosecond_fraction():
    assert format_timestamp("2024-05-01T10:30:00.123456789") == "01 May 2024, 10:30"


def test_format_timestamp_short_fraction_with_zone():
    expected = (
        datetime.fromisoformat("2024-05-01T10:30:00+00:00")
        .astimezone()
        .strftime("%d %b %Y, %H:%M")
    )
    assert format_timestamp("2024-05-01T10:30:00.1234567Z") == expected
    assert format_timestamp("2024-05-01T10:30:00.5+00:00") == expected
