# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""End date parsing for outbound capacity reservation requests.

Two input forms are accepted:

- ISO-8601 (``2030-01-01T00:00:00Z``, offsets allowed, naive values are UTC)
- the legacy textual form ``EEE MMM dd HH:mm:ss zzz yyyy`` produced by
  older templates (``Tue Jan 01 00:00:00 UTC 2030``)

Anything else parses to ``None``: an unparsable end date means "no end
date" here, and callers decide whether that is acceptable.
"""

import logging
import re
from datetime import UTC, datetime, timedelta, timezone

logger = logging.getLogger(__name__)

LEGACY_PATTERN = re.compile(
    r"^(?P<weekday>[A-Za-z]{3}) (?P<month>[A-Za-z]{3}) (?P<day>\d{1,2}) "
    r"(?P<time>\d{2}:\d{2}:\d{2}) (?P<zone>\S+) (?P<year>\d{4})$"
)

# English month abbreviations, independent of the process locale
MONTHS = {
    name: number
    for number, name in enumerate(
        ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        start=1,
    )
}

# Zone abbreviations seen in legacy end dates
ZONE_OFFSETS = {
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
    "CET": 1,
    "CEST": 2,
    "IST": 5.5,
    "JST": 9,
}

GMT_OFFSET_PATTERN = re.compile(r"^GMT(?P<sign>[+-])(?P<hours>\d{1,2}):?(?P<minutes>\d{2})?$")


def _parse_iso(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _zone_offset(zone: str) -> timezone | None:
    if zone.upper() in ZONE_OFFSETS:
        return timezone(timedelta(hours=ZONE_OFFSETS[zone.upper()]))

    match = GMT_OFFSET_PATTERN.match(zone)
    if match:
        delta = timedelta(
            hours=int(match.group("hours")),
            minutes=int(match.group("minutes") or 0),
        )
        return timezone(delta if match.group("sign") == "+" else -delta)

    return None


def _parse_legacy(value: str) -> datetime | None:
    match = LEGACY_PATTERN.match(value)
    if not match:
        return None

    zone = _zone_offset(match.group("zone"))
    if zone is None:
        logger.debug(f"Unknown time zone in legacy end date: {match.group('zone')}")
        return None

    month = MONTHS.get(match.group("month").capitalize())
    if month is None:
        return None

    # Weekday is not checked against the date
    hour, minute, second = (int(part) for part in match.group("time").split(":"))
    try:
        parsed = datetime(
            int(match.group("year")), month, int(match.group("day")), hour, minute, second
        )
    except ValueError:
        return None

    return parsed.replace(tzinfo=zone).astimezone(UTC)


def parse_end_date(value: str | None) -> datetime | None:
    """
    Parse an end date into a UTC-aware datetime.

    Args:
        value: End date in ISO-8601 or legacy textual form

    Returns:
        The instant in UTC, or None when the value is absent or unparsable
    """
    if value is None or not value.strip():
        return None

    value = value.strip()
    parsed = _parse_iso(value)
    if parsed is not None:
        return parsed

    logger.info(f"End date is not ISO-8601, trying legacy format: {value}")
    parsed = _parse_legacy(value)
    if parsed is None:
        logger.warning(f"Could not parse end date: {value}")
    return parsed


def format_end_date(value: datetime | None) -> str | None:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SSZ`` (or None)."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    if value.microsecond:
        return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")
