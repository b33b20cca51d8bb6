"""Human time strings ("2:00 PM") to and from minute-of-day integers."""

import re

from itinerary_editor.errors import FormatError

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*(AM|PM)\s*$", re.IGNORECASE)
_RANGE_RE = re.compile(r"^\s*(.+?)\s*-\s*(.+?)\s*$")


def parse_time(text: str) -> int:
    """Parse a 12-hour time string into minutes since midnight.

    Accepts ``h[:mm] AM|PM`` with a case-insensitive meridiem.

    Raises:
        FormatError: If the string is not a valid 12-hour time
    """
    match = _TIME_RE.match(text or "")
    if not match:
        raise FormatError(f"Unparsable time: {text!r}")

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    meridiem = match.group(3).upper()

    if not 1 <= hours <= 12 or minutes > 59:
        raise FormatError(f"Time out of range: {text!r}")

    if meridiem == "AM" and hours == 12:
        hours = 0
    elif meridiem == "PM" and hours != 12:
        hours += 12

    return hours * 60 + minutes


def format_time(minutes: int, *, always_minutes: bool = False) -> str:
    """Format minutes since midnight as a 12-hour time string.

    ``:00`` is omitted unless ``always_minutes`` is set ("8 AM" vs "8:00 AM").

    Raises:
        FormatError: If minutes is outside [0, 1440)
    """
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise FormatError(f"Minute of day out of range: {minutes}")

    hours, mins = divmod(minutes, 60)
    meridiem = "PM" if hours >= 12 else "AM"
    display_hour = hours % 12 or 12

    if mins or always_minutes:
        return f"{display_hour}:{mins:02d} {meridiem}"
    return f"{display_hour} {meridiem}"


def parse_time_range(text: str) -> tuple[int, int]:
    """Parse ``"<start> - <end>"`` into a (start, end) minute pair."""
    match = _RANGE_RE.match(text or "")
    if not match:
        raise FormatError(f"Unparsable time range: {text!r}")
    return parse_time(match.group(1)), parse_time(match.group(2))


def format_time_range(start: int, end: int, *, always_minutes: bool = False) -> str:
    return (
        f"{format_time(start, always_minutes=always_minutes)} - "
        f"{format_time(end, always_minutes=always_minutes)}"
    )


def format_duration(minutes: int) -> str:
    """Display string for a duration ("2 hours", "1 hour 30 minutes")."""
    hours, mins = divmod(max(minutes, 0), 60)
    parts = []
    if hours:
        parts.append(f"{hours} hour" if hours == 1 else f"{hours} hours")
    if mins or not hours:
        parts.append(f"{mins} minute" if mins == 1 else f"{mins} minutes")
    return " ".join(parts)


def uses_minutes(text: str) -> bool:
    """Whether a time string is written with explicit minutes."""
    return ":" in (text or "")
