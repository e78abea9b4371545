"""
Location catalog.

The set of supported cafeterias is closed: adding an upstream location
means adding a Location member and a catalog entry. There is no dynamic
discovery.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple

from mensa_plan.domain.errors import UnknownLocation


class Location(Enum):
    """Supported cafeteria locations, valued by CLI-friendly slug."""
    REMPART = "rempart"
    INSTITUTSVIERTEL = "institutsviertel"
    LITTENWEILER = "littenweiler"

    @classmethod
    def parse(cls, text: str) -> 'Location':
        """
        Resolve a slug ("rempart") or numeric identifier ("610").

        Numeric identifiers are looked up in DEFAULT_CATALOG.

        Raises:
            UnknownLocation: If text matches neither
        """
        value = text.strip().lower()
        try:
            return cls(value)
        except ValueError:
            return DEFAULT_CATALOG.location_of(value)


@dataclass(frozen=True)
class CatalogEntry:
    """A location with its upstream identifier and display name."""
    location: Location
    identifier: str
    name: str


class PlaceCatalog:
    """
    Bidirectional mapping between locations and upstream identifiers.

    Total over the known set in both directions; identifiers outside of it
    raise UnknownLocation.
    """

    def __init__(self, entries: Tuple[CatalogEntry, ...]):
        self._entries = tuple(entries)
        self._by_location: Dict[Location, CatalogEntry] = {}
        self._by_identifier: Dict[str, CatalogEntry] = {}

        for entry in self._entries:
            if entry.location in self._by_location:
                raise ValueError(f"Duplicate catalog location: {entry.location}")
            if entry.identifier in self._by_identifier:
                raise ValueError(f"Duplicate catalog identifier: {entry.identifier}")
            self._by_location[entry.location] = entry
            self._by_identifier[entry.identifier] = entry

    def identifier_of(self, location: Location) -> str:
        return self._entry(location).identifier

    def name_of(self, location: Location) -> str:
        return self._entry(location).name

    def location_of(self, identifier: str) -> Location:
        try:
            return self._by_identifier[identifier].location
        except KeyError:
            raise UnknownLocation(identifier) from None

    def locations(self) -> Tuple[Location, ...]:
        return tuple(entry.location for entry in self._entries)

    def _entry(self, location: Location) -> CatalogEntry:
        try:
            return self._by_location[location]
        except KeyError:
            raise UnknownLocation(str(location.value)) from None

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_CATALOG = PlaceCatalog((
    CatalogEntry(Location.REMPART, "610", "Mensa Rempartstraße"),
    CatalogEntry(Location.INSTITUTSVIERTEL, "620", "Mensa Institutsviertel"),
    CatalogEntry(Location.LITTENWEILER, "630", "Mensa Littenweiler"),
))
