"""
Timestamp and naming utilities shared by the filter compiler and the series reassembler.

Both directions of the translation work at whole-second resolution: query bounds
are truncated to the second before being sent to the backend, and point end times
are truncated to the second before being turned into millisecond sample timestamps.
"""

import calendar
import re
from datetime import datetime

from .exceptions import TimestampParseError


MILLISECONDS_PER_SECOND = 1_000
NANOSECONDS_PER_SECOND = 1_000_000_000
SECONDS_PER_DAY = 86_400

_RFC3339_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?(Z|z|[+-]\d{2}:\d{2})$"
)
_INVALID_METRIC_NAME_CHARS = re.compile(r"[^a-zA-Z0-9:_]")


def ms_to_seconds(milliseconds: int) -> int:
    """
    Convert Unix milliseconds to whole seconds, truncating toward zero.

    Args:
        milliseconds: Unix timestamp in milliseconds.

    Returns:
        Timestamp in seconds with the sub-second part dropped.
    """
    if milliseconds < 0:
        return -(-milliseconds // MILLISECONDS_PER_SECOND)
    return milliseconds // MILLISECONDS_PER_SECOND


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Convert days since 1970-01-01 to a proleptic Gregorian (year, month, day)."""
    shifted = days + 719_468
    era = shifted // 146_097
    day_of_era = shifted - era * 146_097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36_524 - day_of_era // 146_096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    month_index = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * month_index + 2) // 5 + 1
    month = month_index + 3 if month_index < 10 else month_index - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def format_rfc3339(seconds: int) -> str:
    """
    Format Unix seconds as an RFC 3339 UTC timestamp.

    Whole seconds carry no fractional part, so the result matches the
    nanosecond RFC 3339 form with trailing zeros removed. Years beyond 9999
    are written out in full, so sentinel bounds such as Prometheus' maximum
    query time still format.

    Args:
        seconds: Unix timestamp in seconds.

    Returns:
        Timestamp string such as "1970-01-01T00:16:40Z".
    """
    days, second_of_day = divmod(seconds, SECONDS_PER_DAY)
    year, month, day = _civil_from_days(days)
    hours, remainder = divmod(second_of_day, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{year:04d}-{month:02d}-{day:02d}T{hours:02d}:{minutes:02d}:{secs:02d}Z"


def ms_to_rfc3339(milliseconds: int) -> str:
    """
    Convert Unix milliseconds to an RFC 3339 UTC timestamp at second resolution.

    Args:
        milliseconds: Unix timestamp in milliseconds.

    Returns:
        RFC 3339 timestamp string.
    """
    return format_rfc3339(ms_to_seconds(milliseconds))


def parse_rfc3339_ns(value: str) -> int:
    """
    Parse an RFC 3339 timestamp with up to nanosecond precision.

    Args:
        value: Timestamp string (e.g. "2024-01-01T00:00:00.123456789Z").

    Returns:
        Unix timestamp in nanoseconds.

    Raises:
        TimestampParseError: If the value is not a valid RFC 3339 timestamp.
    """
    match = _RFC3339_PATTERN.match(value or "")
    if match is None:
        raise TimestampParseError(f"Invalid RFC 3339 timestamp: {value!r}")

    date_part, time_part, fraction, zone = match.groups()
    try:
        moment = datetime.strptime(f"{date_part}T{time_part}", "%Y-%m-%dT%H:%M:%S")
    except ValueError as e:
        raise TimestampParseError(f"Invalid RFC 3339 timestamp: {value!r}: {e}") from e

    seconds = calendar.timegm(moment.timetuple())
    if zone not in ("Z", "z"):
        sign = 1 if zone[0] == "+" else -1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        seconds -= sign * (hours * 3600 + minutes * 60)

    nanos = int(fraction.ljust(9, "0")) if fraction else 0
    return seconds * NANOSECONDS_PER_SECOND + nanos


def ns_to_ms_truncated(nanoseconds: int) -> int:
    """
    Convert Unix nanoseconds to milliseconds at whole-second resolution.

    Args:
        nanoseconds: Unix timestamp in nanoseconds.

    Returns:
        Timestamp in milliseconds, always a multiple of 1000.
    """
    return (nanoseconds // NANOSECONDS_PER_SECOND) * MILLISECONDS_PER_SECOND


def sanitize_metric_name(name: str) -> str:
    """
    Make a backend metric type usable as a Prometheus metric name.

    Every character outside [a-zA-Z0-9:_] becomes "_", and a leading digit
    gets a "_" prefix. Sanitizing an already sanitized name is a no-op.

    Args:
        name: Backend metric type (e.g. "k8s.io/container/cpu").

    Returns:
        Sanitized metric name, or "" for empty input.
    """
    if not name:
        return ""
    name = _INVALID_METRIC_NAME_CHARS.sub("_", name)
    if name[0].isdigit():
        name = "_" + name
    return name
