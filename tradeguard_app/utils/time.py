"""
Trading-day time window utilities.

Discipline reports are computed per calendar day. These helpers turn a
report date into the closed interval of timestamps that belong to it.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union


def trading_day_bounds(
    report_date: Union[date, datetime],
    tz: Optional[tzinfo] = None
) -> tuple[datetime, datetime]:
    """
    Get the first and last instant of a trading day.

    Args:
        report_date: Day to report on; a datetime is truncated to its date
        tz: Timezone the day is expressed in (UTC when omitted)

    Returns:
        Tuple of (day_start, day_end), both timezone-aware
    """
    tz = tz or timezone.utc

    if isinstance(report_date, datetime):
        if report_date.tzinfo is not None:
            report_date = report_date.astimezone(tz)
        report_date = report_date.date()

    day_start = datetime.combine(report_date, time.min, tzinfo=tz)
    day_end = day_start + timedelta(days=1) - timedelta(microseconds=1)
    return day_start, day_end


def ensure_aware(ts: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Attach a timezone to naive timestamps.

    Records coming from storage layers are sometimes naive; they are
    interpreted as UTC unless told otherwise.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=tz or timezone.utc)
    return ts


def is_within_day(ts: datetime, day_start: datetime, day_end: datetime) -> bool:
    """Check whether a timestamp falls inside [day_start, day_end]."""
    ts = ensure_aware(ts, day_start.tzinfo)
    return day_start <= ts <= day_end


def format_report_date(report_date: Union[date, datetime]) -> str:
    """
    Format a report date for logging and serialized reports.

    Returns:
        ISO8601 date string (YYYY-MM-DD)
    """
    if isinstance(report_date, datetime):
        return report_date.date().isoformat()
    return report_date.isoformat()
