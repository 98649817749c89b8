import re
from datetime import datetime, timedelta, timezone
from typing import Union

from .types import ParseFailure, SkipReason


# [<date-time>] at the very start of the line, e.g.
#   [2021-03-04T10:00:00.250Z] worker-3 picked up job 17
BRACKETED_TIMESTAMP_RE = re.compile(
    r"""
    ^\[
    (?P<ts>[0-9]{4}-[^\]]{0,30})   # year, dash, then the rest of an RFC-3339 value
    \]
    """,
    re.VERBOSE,
)

RFC3339_RE = re.compile(
    r"""
    (?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})
    [Tt ]
    (?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})
    (?:\.(?P<fraction>[0-9]+))?
    (?P<offset>[Zz]|[+-][0-9]{2}:[0-9]{2})
    """,
    re.VERBOSE,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS = timedelta(milliseconds=1)


def _parse_offset(text: str) -> timezone:
    if text in ("Z", "z"):
        return timezone.utc

    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours > 23 or minutes > 59:
        raise ValueError(f"UTC offset out of range: {text!r}")

    offset = timedelta(hours=hours, minutes=minutes)
    return timezone(-offset if text[0] == "-" else offset)


def parse_rfc3339_ms(text: str) -> int:
    """
    Parse an RFC-3339 date-time into milliseconds since the epoch.

    Fractions of any length are accepted and floored to the millisecond.
    A leap second (:60) counts as the first instant of the next minute.
    Raises ValueError for anything else, including ISO-8601 forms that
    RFC-3339 does not allow (week dates, missing seconds, no offset).
    """
    m = RFC3339_RE.fullmatch(text)
    if not m:
        raise ValueError(f"not an RFC-3339 date-time: {text!r}")

    second = int(m.group("second"))
    leap = second == 60
    if leap:
        second = 59

    fraction = (m.group("fraction") or "")[:6].ljust(6, "0")

    dt = datetime(
        int(m.group("year")),
        int(m.group("month")),
        int(m.group("day")),
        int(m.group("hour")),
        int(m.group("minute")),
        second,
        int(fraction),
        tzinfo=_parse_offset(m.group("offset")),
    )
    if leap:
        dt += timedelta(seconds=1)

    return (dt - EPOCH) // ONE_MS


def extract_timestamp(line: str) -> Union[int, ParseFailure]:
    """
    Extract the bracketed timestamp that starts a log line.

    Returns the timestamp in milliseconds, or a ParseFailure describing why
    the line has none. It should NEVER throw.
    """
    m = BRACKETED_TIMESTAMP_RE.match(line)
    if not m:
        return ParseFailure(raw=line, reason=SkipReason.UNMATCHED)

    try:
        return parse_rfc3339_ms(m.group("ts"))
    except (ValueError, OverflowError) as e:
        return ParseFailure(
            raw=line,
            reason=SkipReason.MALFORMED,
            detail=str(e),
        )
