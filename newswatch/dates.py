from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Named zones accepted in place of a numeric offset, in minutes from UTC.
# Ambiguous abbreviations take their most common meaning (IST = India, BST = British Summer).
NAMED_ZONES = {
    "UT": 0, "UTC": 0, "GMT": 0, "Z": 0, "WET": 0,
    "EST": -300, "EDT": -240, "CST": -360, "CDT": -300,
    "MST": -420, "MDT": -360, "PST": -480, "PDT": -420,
    "AKST": -540, "AKDT": -480, "HST": -600, "AST": -240, "ADT": -180,
    "NST": -210, "NDT": -150, "BRT": -180, "ART": -180,
    "WAT": 60, "BST": 60, "IST": 330, "CET": 60, "CEST": 120, "WEST": 60,
    "EET": 120, "EEST": 180, "CAT": 120, "SAST": 120, "EAT": 180, "MSK": 180,
    "PKT": 300, "NPT": 345, "ICT": 420, "WIB": 420,
    "HKT": 480, "SGT": 480, "PHT": 480, "AWST": 480, "CCT": 480,
    "JST": 540, "KST": 540, "ACST": 570, "ACDT": 630, "AEST": 600, "AEDT": 660,
    "NZST": 720, "NZDT": 780,
}

# GMT/UTC may carry an explicit offset: `GMT+01:00`, `GMT-5`, `UTC+0530`
_ZONE_OFFSET = re.compile(r"([+-])(\d{1,2}):?(\d{2})?$")

# Month/weekday names are matched against English tables, never the process locale.
_RFC822 = (
    r"^\s*(?:(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*,?\s+)?"
    r"(?P<day>\d{1,2})\s+(?P<month>[A-Za-z]{3})[a-z]*\s+(?P<year>\d{4})\s+"
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2})\s+"
)
_RFC822_NUMERIC = re.compile(_RFC822 + r"(?P<zone>[+-]\d{4})\b", re.IGNORECASE)
_RFC822_NAMED = re.compile(
    _RFC822 + r"(?P<zone>[A-Za-z]{1,5})(?P<zone_offset>[+-]\d{1,2}(?::?\d{2})?)?\b",
    re.IGNORECASE,
)
_ISO8601 = re.compile(
    r"^\s*(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})(?:\.\d+)?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})",
)

DateParser = Callable[[str], Optional[datetime]]


def _to_utc(local: datetime) -> Optional[datetime]:
    # Year 1 / year 9999 dates can fall off the calendar once shifted to UTC
    try:
        return local.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def _build(match: "re.Match[str]", offset: timedelta) -> Optional[datetime]:
    month = _MONTHS.get(match.group("month").lower())
    if month is None or abs(offset) >= timedelta(days=1):
        return None
    try:
        local = datetime(
            int(match.group("year")), month, int(match.group("day")),
            int(match.group("hour")), int(match.group("minute")), int(match.group("second")),
            tzinfo=timezone(offset),
        )
    except ValueError:
        return None
    return _to_utc(local)


def parse_rfc822_numeric(text: str) -> Optional[datetime]:
    """`Wed, 02 Oct 2002 13:00:00 +0100`"""
    m = _RFC822_NUMERIC.match(text)
    if not m:
        return None
    zone = m.group("zone")
    sign = -1 if zone[0] == "-" else 1
    offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[3:5]))
    return _build(m, sign * offset)


def parse_rfc822_named(text: str) -> Optional[datetime]:
    """`Wed, 02 Oct 2002 13:00:00 GMT`, also `GMT+01:00`"""
    m = _RFC822_NAMED.match(text)
    if not m:
        return None
    zone = m.group("zone").upper()
    minutes = NAMED_ZONES.get(zone)
    if minutes is None:
        return None
    offset = timedelta(minutes=minutes)

    suffix = m.group("zone_offset")
    if suffix:
        if zone not in ("GMT", "UTC", "UT"):
            return None
        sign, hours, mins = _ZONE_OFFSET.match(suffix).groups()
        offset = timedelta(hours=int(hours), minutes=int(mins or 0))
        if sign == "-":
            offset = -offset
    return _build(m, offset)


def parse_iso8601(text: str) -> Optional[datetime]:
    """`2002-10-02T13:00:00+01:00`, the Atom style."""
    m = _ISO8601.match(text)
    if not m:
        return None
    zone = m.group("zone").replace("Z", "+00:00")
    try:
        parsed = datetime.strptime(f"{m.group('date')}T{m.group('time')}{zone}", "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        return None
    return _to_utc(parsed)


DATE_PARSERS: Sequence[DateParser] = (
    parse_rfc822_numeric,
    parse_rfc822_named,
    parse_iso8601,
)


def parse_date(text: Optional[str], parsers: Sequence[DateParser] = DATE_PARSERS) -> Optional[datetime]:
    """
    Try each parser in order and return the first timezone-aware UTC result.
    Returns None when nothing matches. A parser that raises counts as no match,
    so no exception leaves this function.
    """
    if not text:
        return None
    for parser in parsers:
        try:
            parsed = parser(text)
        except (ValueError, OverflowError):
            continue
        if parsed is not None:
            return parsed
    return None


def normalize_date(text: Optional[str]) -> datetime:
    """
    Comparable publish instant for `text`.

    Unparsable or missing dates become EPOCH so they sort as the oldest items.
    A date in an unexpected format is therefore misordered rather than dropped.
    """
    return parse_date(text) or EPOCH
