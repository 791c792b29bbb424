"""Build facility command and handler"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.production.catalog import RecipeCatalog
from tradergame.domain.production.facility import Facility
from tradergame.domain.production.facility_types import (
    DEFAULT_FACILITY_TYPE,
    DEFAULT_WORKER_COUNT,
    get_facility_type_config,
)
from tradergame.domain.production.inventory import Inventory
from tradergame.ports.outbound.repositories import IFacilityRepository
from tradergame.application.game.subscription_bus import SubscriptionBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildFacilityCommand(Request[Facility]):
    """
    Command to build a new production facility for a company.

    Capacity, effectivity and offered recipes come from the subtype's
    configuration. Subtypes with an auto-start recipe (farms) begin
    producing immediately.
    """
    company_id: str
    facility_subtype: str
    city_id: str
    name: Optional[str] = None

    def validate(self):
        if not self.company_id:
            raise ValueError("company_id is required")
        if not self.city_id:
            raise ValueError("city_id is required")


class BuildFacilityHandler(RequestHandler[BuildFacilityCommand, Facility]):
    """
    Handler for building facilities.

    Raises:
        UnknownFacilityTypeError: If the subtype has no configuration
    """

    def __init__(
        self,
        facility_repository: IFacilityRepository,
        catalog: RecipeCatalog,
        bus: SubscriptionBus
    ):
        self._facility_repo = facility_repository
        self._catalog = catalog
        self._bus = bus

    async def handle(self, request: BuildFacilityCommand) -> Facility:
        config = get_facility_type_config(request.facility_subtype)

        facility = Facility(
            id=str(uuid.uuid4()),
            company_id=request.company_id,
            name=request.name or f"{config.name} ({request.city_id})",
            type=DEFAULT_FACILITY_TYPE,
            facility_subtype=config.id,
            city_id=request.city_id,
            inventory=Inventory.empty(config.inventory_capacity),
            available_recipe_ids=config.available_recipe_ids,
            effectivity=config.effectivity,
            worker_count=DEFAULT_WORKER_COUNT,
        )

        if config.auto_start_recipe_id:
            recipe = self._catalog.lookup(config.auto_start_recipe_id)
            facility = facility.start_production(recipe)

        created = self._facility_repo.create(facility)
        self._bus.publish_facility(created)

        logger.info(f"Built {config.name} {created.id} for company {created.company_id}")
        return created
