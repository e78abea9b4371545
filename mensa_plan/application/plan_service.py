"""
Plan service.

Orchestrates one fetch: build query -> transport -> decode -> Plan.
Every call is an independent unit of work; nothing is cached or shared.
"""
import asyncio
import uuid
from typing import Dict, Optional

from mensa_plan.domain.entities import Day, Plan
from mensa_plan.domain.locations import Location
from mensa_plan.domain.value_objects import Weekday
from mensa_plan.infrastructure.adapters.plan_parser import PlanDecoder
from mensa_plan.infrastructure.endpoints import CURRENT, EndpointGeneration
from mensa_plan.infrastructure.logging.mensa_logger import LogContext, MensaLogger
from mensa_plan.infrastructure.query_builder import QueryBuilder
from mensa_plan.infrastructure.transport import HttpTransport


class PlanService:
    """
    Fetches weekly plans for catalog locations.

    No operation retries; a caller that wants resilience re-invokes
    fetch_one or fetch_all.
    """

    def __init__(
        self,
        generation: EndpointGeneration = CURRENT,
        transport: Optional[HttpTransport] = None,
        decoder: Optional[PlanDecoder] = None,
        logger: Optional[MensaLogger] = None,
    ):
        self.generation = generation
        self.transport = transport or HttpTransport()
        self.decoder = decoder or PlanDecoder(generation.schema)
        self.logger = logger or MensaLogger("service")

    def build_url(self, location: Location, key: str) -> str:
        """Request URL for one location. Raises UnknownLocation."""
        location_id = self.generation.catalog.identifier_of(location)
        return QueryBuilder.for_location(self.generation, location_id, key).build()

    async def fetch_one(
        self,
        location: Location,
        key: str,
        context: Optional[LogContext] = None,
    ) -> Plan:
        """
        Fetch and decode the plan of one location.

        Raises:
            UnknownLocation: If the generation's catalog lacks the location
            TransportError: If the request fails or the status is not 200
            DecodeError: If the body is not a valid plan document
        """
        ctx = context or LogContext(correlation_id=uuid.uuid4().hex[:8])
        ctx = ctx.with_location(location.value, self.generation.name)

        with self.logger.timed_operation("fetch_one", ctx) as operation:
            url = self.build_url(location, key)
            operation.context = operation.context.with_url(url)
            body = await self.transport.get(url)
            return self.decoder.decode(body)

    async def fetch_all(self, key: str) -> Dict[Location, Plan]:
        """
        Fetch every catalog location concurrently.

        Fails fast: the first failure cancels the outstanding fetches and
        is raised; no partial mapping is returned.
        """
        locations = self.generation.catalog.locations()
        ctx = LogContext(correlation_id=uuid.uuid4().hex[:8])

        with self.logger.timed_operation("fetch_all", ctx.with_fields(count=len(locations))):
            tasks = [
                asyncio.ensure_future(self.fetch_one(location, key, ctx))
                for location in locations
            ]
            try:
                plans = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        return dict(zip(locations, plans))

    @staticmethod
    def day_of(plan: Plan, weekday: Weekday) -> Optional[Day]:
        """Day of plan resolving to weekday, or None. Unresolvable dates are skipped."""
        return plan.day(weekday)


async def get_week(
    location: Location,
    key: str,
    generation: EndpointGeneration = CURRENT,
) -> Plan:
    """Fetch one location's plan with a default service."""
    return await PlanService(generation=generation).fetch_one(location, key)
