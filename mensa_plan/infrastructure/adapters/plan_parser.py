"""
Parser for meal plan XML documents.

Strict on the elements a plan needs, lenient on additions: unknown
elements and attributes are ignored. Dates and prices are kept as raw
strings; their validation belongs to the date resolver and the caller.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from lxml import etree

from mensa_plan.domain.entities import Day, Mensa, Menu, Place, Plan
from mensa_plan.domain.value_objects import Price
from mensa_plan.infrastructure.adapters.errors import MalformedDocument, SchemaMismatch

logger = logging.getLogger(__name__)

DAYS_UNDER_PLACE = "ort"
DAYS_UNDER_MENSA = "mensa"


@dataclass(frozen=True)
class PlanSchema:
    """
    XML layout of one endpoint generation.

    Attributes:
        days_parent: Element holding the <tagesplan> children, either
            "ort" (current API) or "mensa" (legacy API)
    """
    days_parent: str = DAYS_UNDER_PLACE

    def __post_init__(self):
        if self.days_parent not in (DAYS_UNDER_PLACE, DAYS_UNDER_MENSA):
            raise ValueError(f"Unsupported days parent: {self.days_parent}")


CURRENT_SCHEMA = PlanSchema(days_parent=DAYS_UNDER_PLACE)
LEGACY_SCHEMA = PlanSchema(days_parent=DAYS_UNDER_MENSA)


class PlanDecoder:
    """Decodes response bodies into Plan entities for a given schema."""

    def __init__(self, schema: PlanSchema = CURRENT_SCHEMA):
        self.schema = schema

    def decode(self, body: str) -> Plan:
        """
        Decode an XML response body.

        Args:
            body: Response text from the API

        Returns:
            The decoded Plan

        Raises:
            MalformedDocument: If the body is empty or not well-formed XML
            SchemaMismatch: If mandatory elements or attributes are missing
        """
        root = _parse_xml(body)

        if root.tag != "plan":
            raise SchemaMismatch(f"expected root element 'plan', got '{root.tag}'", root.tag)

        place = self._parse_place(_single(root, "ort", "plan"), "plan/ort")
        logger.debug(f"Decoded plan for place {place.id} with {len(place.days)} day(s)")
        return Plan(place=place)

    def _parse_place(self, ort: etree._Element, path: str) -> Place:
        place_id = _attribute(ort, "id", path)
        mensa_elem = _single(ort, "mensa", path)
        mensa = Mensa(name=(mensa_elem.text or "").strip())

        if self.schema.days_parent == DAYS_UNDER_MENSA:
            days_parent, days_path = mensa_elem, f"{path}/mensa"
        else:
            days_parent, days_path = ort, path

        days = tuple(
            _parse_day(elem, f"{days_path}/tagesplan[{index}]")
            for index, elem in enumerate(days_parent.iterchildren("tagesplan"), 1)
        )
        return Place(id=place_id, mensa=mensa, days=days)


def parse_plan_xml(body: str, schema: PlanSchema = CURRENT_SCHEMA) -> Plan:
    """Decode a response body with the given schema."""
    return PlanDecoder(schema).decode(body)


def _parse_xml(body: str) -> etree._Element:
    if not body or not body.strip():
        raise MalformedDocument("Empty response body")

    # The text is already decoded, so any declared encoding is overridden.
    parser = etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(body.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        raise MalformedDocument(f"Document is not well-formed: {e}", body) from e


def _parse_day(elem: etree._Element, path: str) -> Day:
    menues = tuple(
        _parse_menu(menue, f"{path}/menue[{index}]")
        for index, menue in enumerate(elem.iterchildren("menue"), 1)
    )
    return Day(date=_attribute(elem, "datum", path), menues=menues)


def _parse_menu(elem: etree._Element, path: str) -> Menu:
    zusatz = _optional(elem, "zusatz", path)
    return Menu(
        category=_text(_single(elem, "art", path)),
        note=_text(zusatz) if zusatz is not None else None,
        name=_text(_single(elem, "name", path)),
        price=_parse_price(_single(elem, "preis", path), f"{path}/preis"),
    )


def _parse_price(elem: etree._Element, path: str) -> Price:
    return Price(
        price_students=_attribute(elem, "studierende", path),
        price_workers=_attribute(elem, "angestellte", path),
        price_guests=_attribute(elem, "gaeste", path),
        price_school=_attribute(elem, "schueler", path),
    )


def _children(elem: etree._Element, tag: str) -> List[etree._Element]:
    return list(elem.iterchildren(tag))


def _single(elem: etree._Element, tag: str, path: str) -> etree._Element:
    found = _children(elem, tag)
    if not found:
        raise SchemaMismatch(f"missing element '{tag}'", path)
    if len(found) > 1:
        raise SchemaMismatch(f"expected one '{tag}' element, found {len(found)}", path)
    return found[0]


def _optional(elem: etree._Element, tag: str, path: str) -> Optional[etree._Element]:
    found = _children(elem, tag)
    if len(found) > 1:
        raise SchemaMismatch(f"expected at most one '{tag}' element, found {len(found)}", path)
    return found[0] if found else None


def _attribute(elem: etree._Element, name: str, path: str) -> str:
    value = elem.get(name)
    if value is None:
        raise SchemaMismatch(f"missing attribute '{name}'", path)
    return value


def _text(elem: etree._Element) -> str:
    return "".join(elem.itertext()).strip()
