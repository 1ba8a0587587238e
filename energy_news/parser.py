from __future__ import annotations

import calendar
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional
import time

from feedparser.datetimes import _parse_date

from .models import RawFeedItem


def _opt_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def parse_raw_item(entry: Dict[str, Any]) -> RawFeedItem:
    """
    Map one element of the service's `items` array to a RawFeedItem.
    Unknown keys are ignored; non-string values are treated as missing.
    """
    enclosure = entry.get("enclosure")
    enclosure_link = None
    if isinstance(enclosure, dict):
        enclosure_link = _opt_str(enclosure.get("link"))

    return RawFeedItem(
        title=_opt_str(entry.get("title")) or "",
        link=_opt_str(entry.get("link")) or "",
        pub_date=_opt_str(entry.get("pubDate")),
        author=_opt_str(entry.get("author")),
        description=_opt_str(entry.get("description")),
        content=_opt_str(entry.get("content")),
        enclosure_link=enclosure_link,
    )


def _to_datetime(value: str) -> Optional[datetime]:
    """
    Parse a publish date string into an aware datetime.
    Priority: ISO-8601 -> RFC-822 -> feedparser's date handlers -> None.
    """
    s = value.strip()
    if not s:
        return None
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        dt = None
    if dt is None:
        try:
            dt = parsedate_to_datetime(s)
        except (TypeError, ValueError, IndexError):
            dt = None
    if dt is None:
        parsed = _parse_date(s)
        if not isinstance(parsed, time.struct_time):
            return None
        try:
            return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            # e.g. year 0 from "0000-01-01"
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def published_timestamp(value: Optional[str]) -> float:
    """Sort key for ranking: POSIX timestamp, or 0.0 when missing or unparseable."""
    if not value:
        return 0.0
    dt = _to_datetime(value)
    if dt is None:
        return 0.0
    try:
        return dt.timestamp()
    except (ValueError, OverflowError, OSError):
        return 0.0
