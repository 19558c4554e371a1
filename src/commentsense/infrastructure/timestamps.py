# src/commentsense/infrastructure/timestamps.py
"""
Timestamp parsing helpers shared by the cleaner and the aggregator
"""

from datetime import datetime
from typing import Optional

MIN_VALID_YEAR = 2005

_FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%d %b %Y",
    "%b %d %Y",
    "%B %d, %Y",
)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 (or common fallback) timestamp

    Aware timestamps are converted to local time; naive ones are taken
    as local time already. Returns None when the text is not a real date.
    """
    text = (value or "").strip()
    if not text:
        return None

    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00").replace("z", "+00:00"))
    except ValueError:
        for fmt in _FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone()
        except (OverflowError, ValueError, OSError):
            return None
    return parsed


def is_valid_date(value: Optional[str]) -> bool:
    """A date is valid when it parses and its year is after 2005"""
    parsed = parse_timestamp(value)
    return parsed is not None and parsed.year > MIN_VALID_YEAR


def local_hour(value: Optional[str]) -> Optional[int]:
    """Hour of day (0-23, local time) or None when unparseable"""
    parsed = parse_timestamp(value)
    return parsed.hour if parsed is not None else None
