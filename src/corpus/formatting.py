"""Fixed-locale (en_US) rendering helpers used by the narrative generator.

Zone display names come from a pinned table rather than the host locale so
that generated descriptions are byte-identical on every machine.
"""

from __future__ import annotations

from datetime import time
from decimal import ROUND_HALF_EVEN, Decimal

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

COORDINATE_PLACES = Decimal("0.00001")

# Generic (non-DST-specific) English zone names, as shown by en_US calendars.
ZONE_DISPLAY_NAMES: dict[str, str] = {
    "America/New_York": "Eastern Time",
    "America/Detroit": "Eastern Time",
    "America/Toronto": "Eastern Time",
    "America/Indiana/Indianapolis": "Eastern Time",
    "America/Kentucky/Louisville": "Eastern Time",
    "America/Chicago": "Central Time",
    "America/Winnipeg": "Central Time",
    "America/Mexico_City": "Central Time",
    "America/Denver": "Mountain Time",
    "America/Boise": "Mountain Time",
    "America/Edmonton": "Mountain Time",
    "America/Phoenix": "Mountain Time",
    "America/Los_Angeles": "Pacific Time",
    "America/Vancouver": "Pacific Time",
    "America/Tijuana": "Pacific Time",
    "America/Anchorage": "Alaska Time",
    "Pacific/Honolulu": "Hawaii-Aleutian Time",
    "America/Halifax": "Atlantic Time",
    "America/Puerto_Rico": "Atlantic Time",
    "America/St_Johns": "Newfoundland Time",
    "America/Regina": "Central Time",
    "America/Sao_Paulo": "Brasilia Time",
    "America/Argentina/Buenos_Aires": "Argentina Time",
    "America/Bogota": "Colombia Time",
    "Europe/London": "Greenwich Mean Time",
    "Europe/Dublin": "Greenwich Mean Time",
    "Europe/Lisbon": "Western European Time",
    "Europe/Paris": "Central European Time",
    "Europe/Berlin": "Central European Time",
    "Europe/Madrid": "Central European Time",
    "Europe/Rome": "Central European Time",
    "Europe/Amsterdam": "Central European Time",
    "Europe/Brussels": "Central European Time",
    "Europe/Stockholm": "Central European Time",
    "Europe/Oslo": "Central European Time",
    "Europe/Copenhagen": "Central European Time",
    "Europe/Warsaw": "Central European Time",
    "Europe/Vienna": "Central European Time",
    "Europe/Zurich": "Central European Time",
    "Europe/Athens": "Eastern European Time",
    "Europe/Helsinki": "Eastern European Time",
    "Europe/Kiev": "Eastern European Time",
    "Europe/Kyiv": "Eastern European Time",
    "Europe/Moscow": "Moscow Time",
    "Asia/Jerusalem": "Israel Time",
    "Asia/Dubai": "Gulf Standard Time",
    "Asia/Kolkata": "India Standard Time",
    "Asia/Tokyo": "Japan Time",
    "Asia/Seoul": "Korean Time",
    "Asia/Shanghai": "China Time",
    "Asia/Hong_Kong": "Hong Kong Time",
    "Asia/Singapore": "Singapore Standard Time",
    "Asia/Manila": "Philippine Time",
    "Australia/Sydney": "Eastern Australia Time",
    "Australia/Melbourne": "Eastern Australia Time",
    "Australia/Brisbane": "Eastern Australia Time",
    "Australia/Adelaide": "Central Australia Time",
    "Australia/Perth": "Western Australia Time",
    "Pacific/Auckland": "New Zealand Time",
    "Africa/Johannesburg": "South Africa Standard Time",
    "Africa/Lagos": "West Africa Time",
    "Africa/Nairobi": "East Africa Time",
    "UTC": "Coordinated Universal Time",
    "Etc/UTC": "Coordinated Universal Time",
}


def weekday_name(weekday: int) -> str:
    """Map a 1-based weekday (1 = Sunday) to its English name."""
    if not 1 <= weekday <= 7:
        msg = f"Weekday must be 1..7, got {weekday}"
        raise ValueError(msg)
    return WEEKDAY_NAMES[weekday - 1]


def format_time_12h(value: time) -> str:
    """Render ``h:mm AM/PM`` (no leading zero on the hour)."""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {meridiem}"


def format_time_24h(value: time) -> str:
    """Render ``HH:mm``."""
    return f"{value.hour:02d}:{value.minute:02d}"


def duration_minutes(seconds: int) -> int:
    """Whole minutes in *seconds*, rounded down."""
    return seconds // 60


def zone_display_name(zone_id: str) -> str | None:
    """Human-readable name for an IANA zone, or None when not in the table."""
    return ZONE_DISPLAY_NAMES.get(zone_id)


def coordinates_valid(latitude: float, longitude: float) -> bool:
    """True when both values lie within standard latitude/longitude bounds."""
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


def round_coordinate(value: float) -> float:
    """Round to 5 decimal places, half-to-even, on the decimal text of *value*.

    ``12.345675`` -> ``12.34568`` and ``12.345665`` -> ``12.34566``.
    """
    return float(Decimal(repr(value)).quantize(COORDINATE_PLACES, rounding=ROUND_HALF_EVEN))
