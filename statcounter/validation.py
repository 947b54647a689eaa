"""Local parameter validation for StatCounter requests.

Devices, dates and timezones are checked before any URL is built, so an
invalid call never reaches the network.
"""

import calendar
import logging
from datetime import date
from functools import lru_cache
from zoneinfo import available_timezones

from statcounter.errors import (
    INVALID_DATES_MESSAGE,
    INVALID_DEVICE_MESSAGE,
    INVALID_TIMEZONE_MESSAGE,
    InvalidParameterError,
)

logger = logging.getLogger(__name__)

DEVICES = ("all", "desktop", "mobile")

DateLike = str | date


def valid_device(device: str) -> bool:
    return device in DEVICES


@lru_cache(maxsize=1)
def _timezones() -> frozenset[str]:
    return frozenset(available_timezones())


def valid_timezone(timezone: str) -> bool:
    """Return True if `timezone` is an IANA identifier such as America/Chicago."""
    return timezone in _timezones()


def _split(value: DateLike) -> list[str]:
    if isinstance(value, date):
        return [f"{value.month:02d}", f"{value.day:02d}", str(value.year)]
    return str(value).split("/")


def valid_date(value: DateLike, today: date | None = None) -> bool:
    """Return True if `value` is a real calendar date in MM/DD/YYYY form.

    The year may not lie in the future relative to `today` (defaults to
    the current date). `datetime.date` values are accepted as well.
    """
    parts = _split(value)
    if len(parts) != 3:
        return False
    if not all(p.isascii() and p.isdigit() for p in parts):
        return False
    month, day, year = (int(p) for p in parts)

    if month < 1 or month > 12:
        return False
    if year < 1:
        return False
    if day < 1 or day > calendar.monthrange(year, month)[1]:
        return False
    if year > (today or date.today()).year:
        return False
    return True


def date_parts(value: DateLike) -> tuple[str, str, str]:
    """Split a valid date into (month, day, year) exactly as the caller wrote them."""
    if not valid_date(value):
        raise InvalidParameterError(INVALID_DATES_MESSAGE)
    month, day, year = _split(value)
    return month, day, year


def date_range_params(start: DateLike, end: DateLike) -> list[tuple[str, str]]:
    """Build the sm/sd/sy/em/ed/ey parameters for a start and end date."""
    if not valid_date(start) or not valid_date(end):
        raise InvalidParameterError(INVALID_DATES_MESSAGE)

    sm, sd, sy = date_parts(start)
    em, ed, ey = date_parts(end)

    if (int(sy), int(sm), int(sd)) > (int(ey), int(em), int(ed)):
        # Passed through unchanged; the remote service decides what this means.
        logger.warning("Start date %s is after end date %s", start, end)

    return [("sm", sm), ("sd", sd), ("sy", sy), ("em", em), ("ed", ed), ("ey", ey)]


def check_device(device: str) -> str:
    if not valid_device(device):
        raise InvalidParameterError(INVALID_DEVICE_MESSAGE)
    return device


def check_timezone(timezone: str) -> str:
    if not valid_timezone(timezone):
        raise InvalidParameterError(INVALID_TIMEZONE_MESSAGE)
    return timezone
