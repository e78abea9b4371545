"""
Weekday resolution for upstream date strings.

The API reports each day as "dd.mm.yyyy". The date is treated as a
calendar date, not an instant, so no timezone conversion happens.
"""
import re
from datetime import date

from mensa_plan.domain.errors import InvalidDate, MalformedDate
from mensa_plan.domain.value_objects import Weekday

_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")


def parse_date(date_string: str) -> date:
    """
    Parse a "day.month.year" string into a calendar date.

    Args:
        date_string: Raw date as delivered by the API, e.g. "23.05.2023"

    Returns:
        The calendar date

    Raises:
        MalformedDate: If the string is not three dot-separated integers
        InvalidDate: If the integers do not form a valid calendar date
    """
    fields = date_string.split(".")
    if len(fields) != 3:
        raise MalformedDate(date_string)

    day_field, month_field, year_field = fields
    if not (
        _UNSIGNED.fullmatch(day_field)
        and _UNSIGNED.fullmatch(month_field)
        and _SIGNED.fullmatch(year_field)
    ):
        raise MalformedDate(date_string)

    try:
        return date(int(year_field), int(month_field), int(day_field))
    except (ValueError, OverflowError) as e:
        raise InvalidDate(date_string, str(e)) from e


def weekday_of(date_string: str) -> Weekday:
    """Resolve the weekday of a "dd.mm.yyyy" string."""
    return Weekday.from_date(parse_date(date_string))
