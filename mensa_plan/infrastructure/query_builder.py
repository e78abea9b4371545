"""
Query string assembly for the meal plan endpoints.

Parameters are joined verbatim: the API expects bracketed keys such as
"tx_swfrspeiseplan_pi1[ort]" unencoded, so no URL encoding is applied.
"""
from typing import Iterable, List, Tuple

from mensa_plan.infrastructure.endpoints import EndpointGeneration


class QueryBuilder:
    """
    Chainable builder for a request URL.

    Usage:
        url = (
            QueryBuilder("https://www.swfr.de/index.php")
            .add_param("id", "1400")
            .add_param("type", "98")
            .build()
        )
    """

    def __init__(self, base_url: str, params: Iterable[Tuple[str, str]] = ()):
        self.base_url = base_url
        self._params: List[Tuple[str, str]] = []
        self.add_params(params)

    @classmethod
    def for_location(
        cls,
        generation: EndpointGeneration,
        location_id: str,
        api_key: str,
    ) -> 'QueryBuilder':
        """Builder with defaults, then location, then API key."""
        return (
            cls(generation.base_url, generation.default_params)
            .add_param(generation.location_key, location_id)
            .add_param(generation.api_key_key, api_key)
        )

    def add_param(self, key: str, value: str) -> 'QueryBuilder':
        self._params.append((key, value))
        return self

    def add_params(self, params: Iterable[Tuple[str, str]]) -> 'QueryBuilder':
        for key, value in params:
            self.add_param(key, value)
        return self

    @property
    def params(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(self._params)

    def query_string(self) -> str:
        return "&".join(f"{key}={value}" for key, value in self._params)

    def build(self) -> str:
        """Return the absolute URL. Does not modify the builder."""
        query = self.query_string()
        if not query:
            return self.base_url
        return f"{self.base_url}?{query}"
