"""Advance game tick command and handler"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.game.state import GameStateAggregator
from tradergame.domain.production.advancer import ProductionAdvancer
from tradergame.domain.production.facility import Facility
from tradergame.domain.shared.exceptions import PersistenceError
from tradergame.ports.outbound.repositories import IFacilityRepository, IGameTimeRepository
from ..subscription_bus import SubscriptionBus
from ..tick import FacilityError, GameTickResult, log_reject, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvanceGameTickCommand(Request[GameTickResult]):
    """
    Run one full tick of the shared game clock: load every facility,
    advance, persist, publish.

    require_facilities: skip the tick entirely when no facility exists
    (the auto-advance scheduler sets this).
    """
    require_facilities: bool = False


class AdvanceGameTickHandler(RequestHandler[AdvanceGameTickCommand, GameTickResult]):
    """
    Handler for persisted ticks.

    Process:
    1. Claim the processing guard (rejected attempts are no-ops)
    2. Load all facilities of all companies
    3. Advance every facility, then the calendar
    4. Save each advanced facility independently, unless it was changed
       by another command since it was loaded
    5. Save the game clock
    6. Publish each company's facility list on the subscription bus
    7. Release the guard, whatever happened

    A PersistenceError while loading propagates with the game clock
    unchanged. Save failures after the calendar has moved are recorded on
    the result instead.
    """

    def __init__(
        self,
        game_state: GameStateAggregator,
        advancer: ProductionAdvancer,
        facility_repository: IFacilityRepository,
        game_time_repository: IGameTimeRepository,
        bus: SubscriptionBus
    ):
        self._game_state = game_state
        self._advancer = advancer
        self._facility_repo = facility_repository
        self._game_time_repo = game_time_repository
        self._bus = bus

    async def handle(self, request: AdvanceGameTickCommand) -> GameTickResult:
        # Claimed before the first await so overlapping requests see the flag
        if not self._game_state.begin_processing():
            log_reject()
            return GameTickResult.rejected_attempt()

        try:
            loop = asyncio.get_running_loop()

            facilities = await loop.run_in_executor(None, self._facility_repo.list_all)

            if request.require_facilities and not facilities:
                logger.info("No facilities in the game, skipping tick")
                return GameTickResult.skipped_attempt(self._game_state.current())

            batch = self._advancer.advance_all(facilities)
            state = self._game_state.apply_tick()

            published: List[Facility] = []
            persistence_errors: List[FacilityError] = []
            for original, outcome in zip(facilities, batch.outcomes):
                if not outcome.advanced:
                    published.append(original)
                    continue
                try:
                    current = await loop.run_in_executor(
                        None, self._save_if_unchanged, original, outcome.facility
                    )
                except PersistenceError as e:
                    logger.error(f"Failed to save facility {original.id}: {e}")
                    persistence_errors.append(FacilityError(original.id, str(e)))
                    published.append(original)
                    continue

                if current is not outcome.facility:
                    logger.warning(f"Facility {original.id} changed during tick {state.tick}, tick result discarded")
                    persistence_errors.append(
                        FacilityError(original.id, "Changed by another command during the tick, not saved")
                    )
                published.append(current)

            error = None
            try:
                await loop.run_in_executor(None, self._game_time_repo.save, state)
            except PersistenceError as e:
                logger.error(f"Failed to save game time at tick {state.tick}: {e}")
                error = f"Game time not saved: {e}"

            self._publish(published)

            logger.info(
                f"Advanced {len(facilities)} facilities to tick {state.tick} "
                f"({len(batch.completions())} completions)"
            )
            return summarize(
                batch,
                state,
                updated_facilities=tuple(published),
                persistence_errors=tuple(persistence_errors),
                error=error,
            )
        finally:
            self._game_state.end_processing()

    def _save_if_unchanged(self, original: Facility, updated: Facility) -> Facility:
        """
        Save the advanced facility if the stored row still matches what was loaded.

        Returns:
            The saved facility, or the stored one when it was changed meanwhile
        """
        stored = self._facility_repo.find_by_id(original.id)
        if stored is not None and stored != original:
            return stored
        return self._facility_repo.save(updated)

    def _publish(self, facilities: List[Facility]):
        by_company: Dict[str, List[Facility]] = {}
        for facility in facilities:
            by_company.setdefault(facility.company_id, []).append(facility)

        for company_id, company_facilities in by_company.items():
            self._bus.publish_facilities(company_id, company_facilities)
