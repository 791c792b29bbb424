"""Stop production command and handler"""
import logging
from dataclasses import dataclass

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.production.facility import Facility
from tradergame.domain.shared.exceptions import FacilityNotFoundError
from tradergame.ports.outbound.repositories import IFacilityRepository
from tradergame.application.game.subscription_bus import SubscriptionBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StopProductionCommand(Request[Facility]):
    """Command to pause a facility. Progress is discarded, the recipe kept."""
    facility_id: str


class StopProductionHandler(RequestHandler[StopProductionCommand, Facility]):
    """Handler for stopping production"""

    def __init__(self, facility_repository: IFacilityRepository, bus: SubscriptionBus):
        self._facility_repo = facility_repository
        self._bus = bus

    async def handle(self, request: StopProductionCommand) -> Facility:
        facility = self._facility_repo.find_by_id(request.facility_id)
        if facility is None:
            raise FacilityNotFoundError(f"Facility '{request.facility_id}' not found")

        saved = self._facility_repo.save(facility.stop_production())
        self._bus.publish_facility(saved)

        logger.info(f"Facility {saved.id} stopped production")
        return saved
