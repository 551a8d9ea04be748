"""
Timestamp parsing for the date formats publishers put in their meta tags.

Both helpers return timezone-aware UTC datetimes and raise
InvalidDateTimeError on anything that does not match exactly.
"""

import re
from datetime import datetime, timedelta, timezone

from .exceptions import InvalidDateTimeError

# e.g. 2020-05-01T12:30:00Z, 2021-03-04T08:15:30.123+00:00
RFC3339_PATTERN = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?'
    r'(?:([Zz])|([+-])(\d{2}):(\d{2}))$'
)

# e.g. 2019-11-20T15:04:05+0000
OFFSET_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# strptime's %z also takes Z and +HH:MM; the publisher format is +HHMM only
NUMERIC_OFFSET_PATTERN = re.compile(r'[+-]\d{4}$')


def parse_rfc3339(value: str) -> datetime:
    """Parse a strict RFC 3339 timestamp and convert it to UTC."""
    m = RFC3339_PATTERN.match(value.strip())
    if not m:
        raise InvalidDateTimeError(f"'{value}' is not an RFC 3339 timestamp", value)

    year, month, day, hour, minute, second = (int(g) for g in m.group(1, 2, 3, 4, 5, 6))
    fraction = m.group(7) or ''
    microsecond = int(fraction[:6].ljust(6, '0')) if fraction else 0

    if m.group(8):
        tz = timezone.utc
    else:
        hours, minutes = int(m.group(10)), int(m.group(11))
        if hours > 23 or minutes > 59:
            raise InvalidDateTimeError(f"offset out of range in '{value}'", value)
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-offset if m.group(9) == '-' else offset)

    try:
        parsed = datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    except ValueError as e:
        raise InvalidDateTimeError(f"'{value}': {e}", value) from None
    return parsed.astimezone(timezone.utc)


def parse_with_format(value: str, fmt: str = OFFSET_FORMAT) -> datetime:
    """Parse value with a strptime format that must include an offset (%z)."""
    text = value.strip()
    if fmt.endswith("%z") and not NUMERIC_OFFSET_PATTERN.search(text):
        raise InvalidDateTimeError(f"'{value}' does not end in a +HHMM offset", value)
    try:
        parsed = datetime.strptime(text, fmt)
    except ValueError as e:
        raise InvalidDateTimeError(f"'{value}' does not match '{fmt}': {e}", value) from None
    if parsed.tzinfo is None:
        raise InvalidDateTimeError(f"'{value}' has no UTC offset", value)
    return parsed.astimezone(timezone.utc)
