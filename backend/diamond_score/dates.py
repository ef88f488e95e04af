"""Calendar helpers for the scores view and season selection."""

import os
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

DATE_FORMAT = "%Y-%m-%d"
DISPLAY_TZ = os.getenv("DISPLAY_TZ", "America/Chicago")


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def parse_date(iso: str) -> date:
    """Parse a ``YYYY-MM-DD`` string. Raises ValueError on malformed input."""
    return datetime.strptime(iso, DATE_FORMAT).date()


def add_days(iso: str, delta: int) -> str:
    return format_date(parse_date(iso) + timedelta(days=delta))


def today_iso(tz_name: str) -> str:
    return format_date(datetime.now(ZoneInfo(tz_name)).date())


def current_season(today: date) -> int:
    # January and February still belong to the previous season
    if today.month < 3:
        return today.year - 1
    return today.year


def format_local_time(iso_time_str: str, tz_name: str) -> str:
    """Convert a UTC ISO timestamp to ``HH:MM`` in the given zone."""
    try:
        utc_time = datetime.fromisoformat(iso_time_str.replace("Z", "+00:00"))
        local_time = utc_time.astimezone(ZoneInfo(tz_name))
        return local_time.strftime("%H:%M")
    except (ValueError, TypeError, AttributeError, OverflowError):
        return iso_time_str
