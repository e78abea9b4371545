"""
Mensa Domain Value Objects

Weekday and price values shared by the meal plan entities.
All value objects are immutable with no identity beyond their values.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum

from mensa_plan.domain.errors import UnknownWeekday


class Weekday(Enum):
    """
    Day of the week in ISO order.

    Values match datetime.date.weekday(): Monday is 0, Sunday is 6.
    """
    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @classmethod
    def from_date(cls, value: date) -> 'Weekday':
        """Return the weekday of a calendar date."""
        return cls(value.weekday())

    @classmethod
    def parse(cls, text: str) -> 'Weekday':
        """
        Parse a three-letter abbreviation, case-insensitive.

        Raises:
            UnknownWeekday: If text is not one of mon..sun
        """
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise UnknownWeekday(text) from None

    @property
    def abbreviation(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Price:
    """
    Price tiers of one dish.

    Values are kept exactly as delivered by the API (e.g. "3,50");
    currency formatting is the upstream's responsibility.
    """
    price_students: str
    price_workers: str
    price_guests: str
    price_school: str
