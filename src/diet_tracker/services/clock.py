"""Current-date provider."""

from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

Today = Callable[[], date]


def local_today(timezone_name: str | None = None) -> Today:
    """Return a callable giving today's date in the zone, or the system's local date."""
    if not timezone_name:
        return date.today
    tz = ZoneInfo(timezone_name)

    def today() -> date:
        return datetime.now(tz=tz).date()

    return today


def fixed_today(day: date) -> Today:
    """Return a provider pinned to a single date."""

    def today() -> date:
        return day

    return today
