"""Unit tests for app.versioning.presenter: labels, grouping and previews."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from app.versioning.presenter import (
    EMPTY_PREVIEW,
    change_description,
    day_label,
    format_absolute_time,
    format_relative_time,
    group_by_day,
    text_preview,
)

UTC = timezone.utc
NOW = datetime(2026, 10, 19, 15, 30, tzinfo=UTC)  # a Monday


@dataclass
class V:
    id: int
    created_at: datetime


def ago(**kwargs) -> datetime:
    return NOW - timedelta(**kwargs)


class TestRelativeTime:

    @pytest.mark.parametrize("seconds", [0, 1, 30, 59])
    def test_just_now(self, seconds):
        assert format_relative_time(ago(seconds=seconds), NOW, UTC) == "just now"

    def test_future_is_just_now(self):
        assert format_relative_time(NOW + timedelta(minutes=5), NOW, UTC) == "just now"

    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=61), "1 minute ago"),
        (timedelta(minutes=2), "2 minutes ago"),
        (timedelta(minutes=59, seconds=59), "59 minutes ago"),
        (timedelta(seconds=3661), "1 hour ago"),
        (timedelta(hours=5), "5 hours ago"),
        (timedelta(hours=25), "1 day ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
    ])
    def test_units(self, delta, expected):
        assert format_relative_time(NOW - delta, NOW, UTC) == expected

    def test_older_than_a_week_is_a_date(self):
        assert format_relative_time(ago(days=8), NOW, UTC) == "Oct 11"

    def test_previous_year_includes_year(self):
        ts = datetime(2025, 1, 5, 9, 0, tzinfo=UTC)
        assert format_relative_time(ts, NOW, UTC) == "Jan 5, 2025"

    def test_naive_timestamps_are_utc(self):
        naive = (NOW - timedelta(minutes=3)).replace(tzinfo=None)
        assert format_relative_time(naive, NOW, UTC) == "3 minutes ago"


class TestDayLabel:

    def test_today(self):
        assert day_label(NOW.replace(hour=0, minute=1), NOW, UTC) == "Today"

    def test_yesterday(self):
        assert day_label(datetime(2026, 10, 18, 23, 59, tzinfo=UTC), NOW, UTC) == "Yesterday"

    def test_weekday_within_a_week(self):
        assert day_label(datetime(2026, 10, 15, 8, 0, tzinfo=UTC), NOW, UTC) == "Thursday"

    def test_seven_days_ago_is_a_date(self):
        assert day_label(datetime(2026, 10, 12, 8, 0, tzinfo=UTC), NOW, UTC) == "Oct 12"

    def test_other_year(self):
        assert day_label(datetime(2024, 1, 5, tzinfo=UTC), NOW, UTC) == "Jan 5, 2024"

    def test_uses_display_timezone(self):
        ny = ZoneInfo("America/New_York")
        # 02:00 UTC on the 19th is still the evening of the 18th in New York.
        assert day_label(datetime(2026, 10, 19, 2, 0, tzinfo=UTC), NOW, ny) == "Yesterday"


class TestGroupByDay:

    def test_same_calendar_day_shares_a_group(self):
        versions = [V(2, NOW.replace(hour=15)), V(1, NOW.replace(hour=0, minute=0))]
        groups = group_by_day(versions, NOW, tz=UTC)
        assert len(groups) == 1
        assert groups[0].label == "Today"
        assert [v.id for v in groups[0].items] == [2, 1]

    def test_day_boundary_splits_23_and_25_hours(self):
        now = datetime(2026, 10, 19, 0, 30, tzinfo=UTC)
        versions = [V(2, now - timedelta(hours=23)), V(1, now - timedelta(hours=25))]
        groups = group_by_day(versions, now, tz=UTC)
        assert [g.label for g in groups] == ["Yesterday", "Saturday"]

    def test_group_order(self):
        versions = [
            V(6, ago(minutes=1)),
            V(5, datetime(2026, 10, 18, 9, tzinfo=UTC)),
            V(4, datetime(2026, 10, 16, 9, tzinfo=UTC)),
            V(3, datetime(2026, 10, 13, 9, tzinfo=UTC)),
            V(2, datetime(2026, 10, 6, 9, tzinfo=UTC)),
            V(1, datetime(2025, 12, 31, 9, tzinfo=UTC)),
        ]
        labels = [g.label for g in group_by_day(versions, NOW, tz=UTC)]
        assert labels == ["Today", "Yesterday", "Friday", "Tuesday", "Oct 6", "Dec 31, 2025"]

    def test_groups_are_keyed_by_date_not_label(self):
        versions = [
            V(2, datetime(2026, 10, 13, 9, tzinfo=UTC)),
            V(1, datetime(2026, 10, 6, 9, tzinfo=UTC)),
        ]
        groups = group_by_day(versions, NOW, tz=UTC)
        assert [g.key.isoformat() for g in groups] == ["2026-10-13", "2026-10-06"]

    def test_custom_timestamp_accessor(self):
        items = [{"at": ago(minutes=5)}, {"at": ago(days=1)}]
        groups = group_by_day(items, NOW, timestamp=lambda i: i["at"], tz=UTC)
        assert [g.label for g in groups] == ["Today", "Yesterday"]

    def test_empty(self):
        assert group_by_day([], NOW, tz=UTC) == []


class TestLabels:

    @pytest.mark.parametrize("change_type,text", [
        ("created", "Document created"),
        ("title_updated", "Title changed"),
        ("content_modified", "Content edited"),
        ("restored", "Restored from previous version"),
    ])
    def test_change_description(self, change_type, text):
        assert change_description(change_type) == text

    def test_absolute_time(self):
        ts = datetime(2024, 1, 5, 15, 4, tzinfo=UTC)
        assert format_absolute_time(ts, UTC) == "Jan 5, 2024, 3:04 PM"

    def test_preview_strips_markup(self):
        assert text_preview("<p>Hello <b>world</b>\n &amp; co</p>") == "Hello world & co"

    def test_preview_truncates(self):
        preview = text_preview("<p>" + "a" * 150 + "</p>")
        assert preview == "a" * 100 + "..."

    @pytest.mark.parametrize("markup", ["", None, "<p></p>"])
    def test_preview_empty(self, markup):
        assert text_preview(markup) == EMPTY_PREVIEW
