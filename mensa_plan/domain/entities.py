"""
Mensa Domain Entities

Entities of one decoded weekly meal plan. All entities are immutable
(frozen dataclasses) and constructed once per fetch.

Plan is the aggregate root.
"""
import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple

from mensa_plan.domain.dates import parse_date
from mensa_plan.domain.errors import DateError
from mensa_plan.domain.value_objects import Price, Weekday

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Menu:
    """
    A single dish on a day's plan.

    Attributes:
        category: Free-text dish category, e.g. "Essen 1"
        note: Optional dietary/allergen annotation (absent in some variants)
        name: Dish description
        price: Price tiers
    """
    category: str
    name: str
    price: Price
    note: Optional[str] = None


@dataclass(frozen=True)
class Day:
    """
    One calendar day's offerings.

    Only the raw date string is stored; the weekday is derived on demand.
    """
    date: str
    menues: Tuple[Menu, ...] = field(default_factory=tuple)

    def to_date(self) -> date:
        """Parse the raw date. Raises DateError on malformed input."""
        return parse_date(self.date)

    def weekday(self) -> Weekday:
        """Resolve the weekday. Raises DateError on malformed input."""
        return Weekday.from_date(self.to_date())


@dataclass(frozen=True)
class Mensa:
    """Display name of the location as reported by the API."""
    name: str


@dataclass(frozen=True)
class Place:
    """
    A physical cafeteria location.

    `id` is the identifier echoed by the API, which need not equal the
    identifier sent in the request. Days keep the order they were received in.
    """
    id: str
    mensa: Mensa
    days: Tuple[Day, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Plan:
    """Weekly meal plan aggregate root. Holds exactly one place."""
    place: Place

    @property
    def mensa_name(self) -> str:
        return self.place.mensa.name

    def days(self) -> Dict[Weekday, Day]:
        """
        Index days by resolved weekday.

        Days whose date cannot be resolved are skipped. When several days
        resolve to the same weekday, the last one in received order wins.
        """
        by_weekday: Dict[Weekday, Day] = {}
        for day in self.place.days:
            try:
                weekday = day.weekday()
            except DateError as e:
                logger.debug(f"Skipping day with unresolvable date: {e}")
                continue
            by_weekday[weekday] = day
        return by_weekday

    def day(self, weekday: Weekday) -> Optional[Day]:
        return self.days().get(weekday)

    def to_dict(self) -> Dict[str, Any]:
        """Nested plain data in received order, ready for json.dumps."""
        return asdict(self)
