"""ISO-8601 duration parsing for run times."""

import re

from .errors import DurationParseFailure
from .models import DURATION_UNAVAILABLE, ParsedDuration

_DURATION_RE = re.compile(
    r"^P(?!$)"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T(?=\d)"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)(?:[.,](?P<fraction>\d+))?S)?"
    r")?$"
)

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


def parse_duration(raw: str) -> ParsedDuration:
    """Parse an ISO-8601 duration into hours, minutes, seconds and milliseconds.

    Durations without a time component (``P1Y``, ``P2W``) or carrying
    years or months have no fixed breakdown and yield DURATION_UNAVAILABLE.
    Days and weeks next to a time component are folded into hours.

    Args:
        raw: Duration string such as ``PT1H2M3.004S``

    Returns:
        The parsed duration, normalized so minutes and seconds stay below 60

    Raises:
        DurationParseFailure: If the string is not an ISO-8601 duration
    """
    match = _DURATION_RE.match(raw.strip()) if raw else None
    if match is None:
        raise DurationParseFailure(f"Invalid ISO-8601 duration: {raw!r}")

    parts = match.groupdict()
    has_time = any(parts[unit] is not None for unit in ("hours", "minutes", "seconds"))
    if not has_time or parts["years"] is not None or parts["months"] is not None:
        return DURATION_UNAVAILABLE

    def unit(name: str) -> int:
        value = parts[name]
        return int(value) if value is not None else 0

    hours = unit("hours") + 24 * (unit("days") + 7 * unit("weeks"))
    fraction = parts["fraction"] or ""
    total_ms = (
        hours * _MS_PER_HOUR
        + unit("minutes") * _MS_PER_MINUTE
        + unit("seconds") * _MS_PER_SECOND
        + int((fraction + "000")[:3])
    )

    hours, remainder = divmod(total_ms, _MS_PER_HOUR)
    minutes, remainder = divmod(remainder, _MS_PER_MINUTE)
    seconds, milliseconds = divmod(remainder, _MS_PER_SECOND)
    return ParsedDuration(
        hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds
    )
