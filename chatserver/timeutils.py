"""Date and time helpers."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?"
    r"(?:(Z)|([+-])([0-9]{2}):([0-9]{2}))",
    re.ASCII,
)


def parse_datetime(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into a timezone-aware datetime.

    Raises ValueError when the text is not a valid RFC 3339 timestamp.
    """
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise ValueError(f"parsing time {value!r}: not in RFC 3339 format")

    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = (
        match.groups()
    )

    if zulu:
        tz = timezone.utc
    else:
        hours, minutes = int(off_h), int(off_m)
        if hours > 23 or minutes > 59:
            raise ValueError(f"parsing time {value!r}: time zone offset out of range")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-offset if sign == "-" else offset)

    microsecond = int((fraction or "0")[:6].ljust(6, "0"))

    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=tz,
        )
    except ValueError as exc:
        raise ValueError(f"parsing time {value!r}: {exc}") from exc