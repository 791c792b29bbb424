"""Get game state query and handler"""
from dataclasses import dataclass

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.game.state import GameState, GameStateAggregator


@dataclass(frozen=True)
class GetGameStateQuery(Request[GameState]):
    """Query for the current game clock snapshot"""
    pass


class GetGameStateHandler(RequestHandler[GetGameStateQuery, GameState]):
    """Returns the aggregator's current snapshot"""

    def __init__(self, game_state: GameStateAggregator):
        self._game_state = game_state

    async def handle(self, request: GetGameStateQuery) -> GameState:
        return self._game_state.current()
