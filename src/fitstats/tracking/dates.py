"""Calendar-day handling for daily records.

A record's day is the calendar date in the user's local timezone at the time
of the call. No timezone is stored with the record, so a user who changes
timezone can land two writes on different keys for what felt like one day.
Configuring ``tracking.timezone`` pins the day boundary to a fixed zone.
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fitstats.errors import ValidationError

TimezoneLike = Union[str, tzinfo, None]


def resolve_timezone(tz: TimezoneLike) -> Optional[tzinfo]:
    """Resolve an IANA name (or tzinfo) to a tzinfo; None means local time."""
    if tz is None or isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: '{tz}'") from e


def to_local_date(moment: Union[date, datetime], tz: TimezoneLike = None) -> date:
    """Truncate a date or datetime to its calendar day.

    Aware datetimes are converted to ``tz`` (process local time when None)
    before truncation; naive datetimes are taken as already local.
    """
    if not isinstance(moment, datetime):
        return moment
    if moment.tzinfo is not None:
        zone = resolve_timezone(tz)
        moment = moment.astimezone(zone) if zone is not None else moment.astimezone()
    return moment.date()


def local_today(tz: TimezoneLike = None) -> date:
    """Today's calendar date in ``tz``, or in process local time."""
    zone = resolve_timezone(tz)
    if zone is None:
        return date.today()
    return datetime.now(zone).date()


def record_key(user_id: str, day: Union[date, datetime]) -> str:
    """Document key of a user's record for one day: ``{user_id}_{YYYY-MM-DD}``."""
    if not user_id:
        raise ValidationError("user_id is required")
    return f"{user_id}_{to_local_date(day).isoformat()}"


def parse_day(value: Union[str, date, datetime]) -> date:
    """Parse a stored or user-supplied day (ISO date, or ISO timestamp)."""
    if isinstance(value, (date, datetime)):
        return to_local_date(value)
    text = str(value).strip()
    try:
        if len(text) > 10:
            return to_local_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        return date.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD") from e
