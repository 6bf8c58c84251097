import re
from datetime import date, timedelta

_WEEK_NUM_RE = re.compile(r"\d+")
_WEEK_ID_RE = re.compile(r"(\D+)(\d+)")

_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def ordinal_from_week_id(week_id: str) -> int | None:
    """Extract the 1-based week ordinal from an id like 'week4' or 'week4.json'.

    Returns None when the id carries no number.
    """
    m = _WEEK_NUM_RE.search(week_id)
    if not m:
        return None
    return int(m.group(0))


def week_label(week_id: str) -> str:
    """Format a week id for display: 'week4' -> 'Week 4'."""
    label = _WEEK_ID_RE.sub(r"\1 \2", week_id, count=1)
    return label[:1].upper() + label[1:]


def week_date_range(ordinal: int, anchor: date) -> tuple[date, date]:
    """Return (first_day, last_day) of week `ordinal`, counted from `anchor`.

    Week 1 starts on the anchor; each week spans 7 days inclusive.
    """
    start = anchor + timedelta(days=(ordinal - 1) * 7)
    return start, start + timedelta(days=6)


def format_day(d: date) -> str:
    """Format a date as 'Jan 5'."""
    return f"{_MONTHS[d.month - 1]} {d.day}"


def format_date_range(start: date, end: date) -> str:
    """Format a week interval as 'Jan 5 - Jan 11'."""
    return f"{format_day(start)} - {format_day(end)}"
