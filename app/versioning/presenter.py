"""
Display helpers for version history: day grouping, relative times,
change labels and plain-text previews.

Time-based helpers take ``now`` explicitly so callers can recompute labels
on a timer without refetching versions.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Iterable, TypeVar
from zoneinfo import ZoneInfo

from markupsafe import Markup

from app.config import settings
from app.models.document_version import ChangeType

T = TypeVar("T")

CHANGE_DESCRIPTIONS = {
    ChangeType.created.value: "Document created",
    ChangeType.title_updated.value: "Title changed",
    ChangeType.content_modified.value: "Content edited",
    ChangeType.restored.value: "Restored from previous version",
}

EMPTY_PREVIEW = "Empty document"


def display_zone() -> tzinfo:
    return ZoneInfo(settings.display_timezone)


def as_utc(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we store is UTC.
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def local_date(ts: datetime, tz: tzinfo | None = None) -> date:
    return as_utc(ts).astimezone(tz or display_zone()).date()


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'} ago"


def format_short_date(ts: datetime, now: datetime, tz: tzinfo | None = None) -> str:
    """``Jan 5`` within the current year, ``Jan 5, 2024`` otherwise."""
    tz = tz or display_zone()
    local = as_utc(ts).astimezone(tz)
    label = f"{local:%b} {local.day}"
    if local.year != as_utc(now).astimezone(tz).year:
        label += f", {local.year}"
    return label


def format_absolute_time(ts: datetime, tz: tzinfo | None = None) -> str:
    local = as_utc(ts).astimezone(tz or display_zone())
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local:%M} {local:%p}"


def format_relative_time(ts: datetime, now: datetime, tz: tzinfo | None = None) -> str:
    seconds = (as_utc(now) - as_utc(ts)).total_seconds()
    if seconds < 60:
        return "just now"
    minutes = int(seconds // 60)
    if minutes < 60:
        return _plural(minutes, "minute")
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")
    days = hours // 24
    if days < 7:
        return _plural(days, "day")
    return format_short_date(ts, now, tz)


def day_label(ts: datetime, now: datetime, tz: tzinfo | None = None) -> str:
    tz = tz or display_zone()
    days_ago = (local_date(now, tz) - local_date(ts, tz)).days
    if days_ago <= 0:
        return "Today"
    if days_ago == 1:
        return "Yesterday"
    if days_ago < 7:
        return f"{as_utc(ts).astimezone(tz):%A}"
    return format_short_date(ts, now, tz)


def change_description(change_type: str) -> str:
    return CHANGE_DESCRIPTIONS.get(str(getattr(change_type, "value", change_type)), "Updated")


def text_preview(markup: str | None, limit: int = 100) -> str:
    """Plain-text preview of stored editor markup."""
    text = Markup(markup or "").striptags()
    if not text:
        return EMPTY_PREVIEW
    if len(text) > limit:
        return text[:limit] + "..."
    return text


@dataclass
class DayGroup:
    key: date
    label: str
    items: list = field(default_factory=list)
    latest: datetime | None = None


def group_by_day(
    items: Iterable[T],
    now: datetime,
    timestamp: Callable[[T], datetime] = lambda v: v.created_at,
    tz: tzinfo | None = None,
) -> list[DayGroup]:
    """Bucket newest-first items by calendar day in the display timezone.

    Groups are keyed by date, so two different weeks never collide on a
    weekday label. Order: Today, Yesterday, then most recent first.
    """
    tz = tz or display_zone()
    groups: dict[date, DayGroup] = {}
    for item in items:
        ts = as_utc(timestamp(item))
        key = local_date(ts, tz)
        group = groups.get(key)
        if group is None:
            group = groups[key] = DayGroup(key=key, label=day_label(ts, now, tz))
        group.items.append(item)
        if group.latest is None or ts > group.latest:
            group.latest = ts

    today = local_date(now, tz)

    def rank(group: DayGroup):
        days_ago = (today - group.key).days
        pinned = 0 if days_ago <= 0 else 1 if days_ago == 1 else 2
        return (pinned, -group.latest.timestamp())

    return sorted(groups.values(), key=rank)

