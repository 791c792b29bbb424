"""Process game tick command and handler"""
import logging
from dataclasses import dataclass
from typing import Tuple

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.game.state import GameStateAggregator
from tradergame.domain.production.advancer import ProductionAdvancer
from tradergame.domain.production.facility import Facility
from ..tick import GameTickResult, log_reject, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessGameTickCommand(Request[GameTickResult]):
    """
    Advance the game by one tick over caller-supplied facilities.

    Nothing is loaded or saved; the updated facilities are returned on the
    result for the caller to persist.
    """
    facilities: Tuple[Facility, ...]

    def __post_init__(self):
        object.__setattr__(self, 'facilities', tuple(self.facilities))


class ProcessGameTickHandler(RequestHandler[ProcessGameTickCommand, GameTickResult]):
    """
    Handler for in-memory ticks.

    Shares the processing guard with AdvanceGameTickHandler, so at most one
    tick runs at a time whichever path requests it.
    """

    def __init__(self, game_state: GameStateAggregator, advancer: ProductionAdvancer):
        self._game_state = game_state
        self._advancer = advancer

    async def handle(self, request: ProcessGameTickCommand) -> GameTickResult:
        if not self._game_state.begin_processing():
            log_reject()
            return GameTickResult.rejected_attempt()

        try:
            batch = self._advancer.advance_all(request.facilities)
            state = self._game_state.apply_tick()
            return summarize(batch, state)
        except Exception as e:
            logger.error(f"Game tick failed: {e}", exc_info=True)
            return GameTickResult.failed(str(e))
        finally:
            self._game_state.end_processing()
