"""Date-string parsing for scraped event listings.

Listings on Romanian sites use day-first formats.  Patterns are tried in a
fixed order, then ``dateutil`` gets a day-first generic parse, and when all
of that fails the event is scheduled for tomorrow.  The result is always a
timezone-aware ``datetime``; callers never see ``None``.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, tzinfo

from dateutil import parser as dateutil_parser

# (regex, (day_group, month_group, year_group))
_DATE_PATTERNS: tuple[tuple[re.Pattern[str], tuple[int, int, int]], ...] = (
    (re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{4})"), (1, 2, 3)),   # DD-MM-YYYY, DD/MM/YYYY
    (re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})"), (3, 2, 1)),   # YYYY-MM-DD, YYYY/MM/DD
    (re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{4})"), (1, 2, 3)),       # DD.MM.YYYY
)

_TIME_RE = re.compile(r"\b(\d{1,2})[:.](\d{2})\b(?!\.\d)")


def _extract_time(text: str) -> tuple[int, int]:
    # Strip dates first so "15.12.2025" is not read as 15:12.
    stripped = text
    for pattern, _ in _DATE_PATTERNS:
        stripped = pattern.sub(" ", stripped)
    match = _TIME_RE.search(stripped)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour < 24 and minute < 60:
            return hour, minute
    return 0, 0


def tomorrow(now: datetime) -> datetime:
    """Fallback date: the same wall-clock time one day after *now*."""
    return now + timedelta(days=1)


def parse_event_date(text: str | None, tz: tzinfo, now: datetime) -> datetime:
    """Parse a listing's date string into an aware datetime in *tz*.

    Parameters
    ----------
    text:
        The raw date text scraped from the page (may be empty or ``None``).
    tz:
        Timezone the listing is published in (Europe/Bucharest for every
        current source).
    now:
        The aggregator's clock reading, used for the tomorrow fallback.

    Returns
    -------
    datetime
        Always timezone-aware.
    """
    if not text or not text.strip():
        return tomorrow(now)

    for pattern, (d_idx, m_idx, y_idx) in _DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            hour, minute = _extract_time(text)
            return datetime(
                int(match.group(y_idx)),
                int(match.group(m_idx)),
                int(match.group(d_idx)),
                hour,
                minute,
                tzinfo=tz,
            )
        except ValueError:
            # e.g. 31-02-2025; try the next pattern.
            continue

    try:
        parsed = dateutil_parser.parse(text, dayfirst=True, fuzzy=True)
    except (ValueError, OverflowError):
        return tomorrow(now)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)
