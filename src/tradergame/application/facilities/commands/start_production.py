"""Start production command and handler"""
import logging
from dataclasses import dataclass

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.production.catalog import RecipeCatalog
from tradergame.domain.production.facility import Facility
from tradergame.domain.shared.exceptions import FacilityNotFoundError
from tradergame.ports.outbound.repositories import IFacilityRepository
from tradergame.application.game.subscription_bus import SubscriptionBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartProductionCommand(Request[Facility]):
    """
    Command to select a recipe at a facility and start it from zero progress.

    The facility only starts producing when it holds the recipe inputs.
    With require_inputs the command fails instead of leaving it idle.
    """
    facility_id: str
    recipe_id: str
    require_inputs: bool = False

    def validate(self):
        if not self.facility_id:
            raise ValueError("facility_id is required")
        if not self.recipe_id:
            raise ValueError("recipe_id is required")


class StartProductionHandler(RequestHandler[StartProductionCommand, Facility]):
    """
    Handler for starting production.

    Raises:
        FacilityNotFoundError: If the facility does not exist
        RecipeNotFoundError: If the recipe is not in the catalog
        RecipeNotAvailableError: If the facility does not offer the recipe
        InsufficientResourcesError: If require_inputs and inputs are missing
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

    async def handle(self, request: StartProductionCommand) -> Facility:
        facility = self._facility_repo.find_by_id(request.facility_id)
        if facility is None:
            raise FacilityNotFoundError(f"Facility '{request.facility_id}' not found")

        recipe = self._catalog.lookup(request.recipe_id)
        updated = facility.start_production(recipe, require_inputs=request.require_inputs)

        saved = self._facility_repo.save(updated)
        self._bus.publish_facility(saved)

        if saved.is_producing:
            logger.info(f"Facility {saved.id} started {recipe.name}")
        else:
            logger.info(f"Facility {saved.id} selected {recipe.name}, waiting for inputs")
        return saved
