"""
Endpoint generations of the SWFR meal plan API.

A generation is configuration, not a type: base URL, default query
parameters, parameter names, XML layout and location table. Transport and
decoding are shared by all generations.
"""
from dataclasses import dataclass, field
from typing import Tuple

from mensa_plan.domain.locations import DEFAULT_CATALOG, PlaceCatalog
from mensa_plan.infrastructure.adapters.plan_parser import (
    CURRENT_SCHEMA,
    LEGACY_SCHEMA,
    PlanSchema,
)


@dataclass(frozen=True)
class EndpointGeneration:
    """
    Immutable descriptor of one API generation.

    Attributes:
        name: Short identifier ("current", "legacy")
        base_url: Absolute endpoint URL without query string
        default_params: Ordered (key, value) pairs sent with every request
        param_prefix: Prefix of the plugin parameters, e.g. "tx_swfrspeiseplan_pi1"
        schema: XML layout of the responses
        catalog: Locations served by this generation
    """
    name: str
    base_url: str
    default_params: Tuple[Tuple[str, str], ...]
    param_prefix: str
    schema: PlanSchema
    catalog: PlaceCatalog = field(default=DEFAULT_CATALOG, compare=False)
    location_param: str = "ort"
    api_key_param: str = "apiKey"

    @property
    def location_key(self) -> str:
        return f"{self.param_prefix}[{self.location_param}]"

    @property
    def api_key_key(self) -> str:
        return f"{self.param_prefix}[{self.api_key_param}]"


CURRENT = EndpointGeneration(
    name="current",
    base_url="https://www.swfr.de/index.php",
    default_params=(("id", "1400"), ("type", "98")),
    param_prefix="tx_swfrspeiseplan_pi1",
    schema=CURRENT_SCHEMA,
)

LEGACY = EndpointGeneration(
    name="legacy",
    base_url="https://www.swfr.de/apispeiseplan",
    default_params=(("type", "98"),),
    param_prefix="tx_speiseplan_pi1",
    schema=LEGACY_SCHEMA,
)

GENERATIONS = {generation.name: generation for generation in (CURRENT, LEGACY)}


def generation_by_name(name: str) -> EndpointGeneration:
    """Look up a generation by name. Raises ValueError when unknown."""
    try:
        return GENERATIONS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown endpoint generation: {name!r} "
            f"(expected one of: {', '.join(GENERATIONS)})"
        ) from None
