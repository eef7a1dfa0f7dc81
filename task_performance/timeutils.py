"""Date parsing and elapsed-time helpers."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)

# Tried in order before the lenient ISO fallback.
_STRICT_FORMATS = (
    "%m/%d/%Y %H:%M",  # 8/25/2025 8:50
    "%m/%d/%Y %I:%M:%S.%f %p",  # 7/28/2025 10:01:03.405 AM
    "%m/%d/%Y %H:%M:%S.%f %p",  # 7/28/2025 13:01:03.405 PM, meridiem ignored
    "%Y-%m-%dT%H:%M:%S.%fZ",  # 2025-08-25T13:20:00.000Z
    "%Y-%m-%dT%H:%M:%S.%f%z",  # 2025-08-15T09:27:58.694+01:00
)

_EMBEDDED_TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z")
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")
_ONE_MINUTE = timedelta(minutes=1)


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_lenient(text: str) -> datetime | None:
    candidate = text.replace("Z", "+00:00") if text.endswith("Z") else text
    candidate = _EXCESS_FRACTION.sub(r"\1", candidate)
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def parse_instant(raw: str | None) -> datetime | None:
    """Parse a source date string into an aware UTC datetime.

    Naive values are read as UTC. Blank input yields ``None`` quietly; any
    other unparsable value yields ``None`` and a warning.
    """

    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None

    for fmt in _STRICT_FORMATS:
        try:
            return to_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue

    parsed = _parse_lenient(text)
    if parsed is not None:
        return to_utc(parsed)

    logger.warning("Could not parse date: %s", text)
    return None


def format_instant(instant: datetime | None) -> str:
    """Canonical ISO-8601 UTC text with millisecond precision, or ''."""

    if instant is None:
        return ""
    text = to_utc(instant).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def elapsed_minutes(start: datetime | None, end: datetime | None) -> int | None:
    """Absolute whole minutes between two instants, truncated."""

    if start is None or end is None:
        return None
    return abs(to_utc(end) - to_utc(start)) // _ONE_MINUTE


def extract_embedded_timestamp(text: str | None) -> datetime | None:
    """Find the first ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in free text and parse it."""

    if not text:
        return None
    match = _EMBEDDED_TIMESTAMP.search(text)
    if not match:
        return None
    return parse_instant(match.group(0))
