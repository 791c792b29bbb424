"""
Game state aggregator.

GameState is an immutable snapshot of the calendar date, the tick counter
and the wall-clock schedule. GameStateAggregator owns the one live state for
a running game and is the only place it changes. The processing flag is the
single guard that keeps two ticks from running at once.
"""
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..calendar.game_date import GameDate, TICK_INTERVAL
from ..shared.exceptions import TickNotInProgressError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """Immutable game clock snapshot"""
    date: GameDate
    tick: int
    next_tick_time: datetime
    last_tick_time: datetime
    is_processing: bool = False

    def __post_init__(self):
        if self.tick < 0:
            raise ValueError("tick cannot be negative")

    @classmethod
    def new_game(cls, now: datetime) -> 'GameState':
        """State for a game that has just started at now"""
        return cls(
            date=GameDate.starting(),
            tick=0,
            last_tick_time=now,
            next_tick_time=now + TICK_INTERVAL,
        )

    def is_due(self, now: datetime) -> bool:
        return now >= self.next_tick_time


class GameStateAggregator:
    """Holds and mutates the live GameState"""

    def __init__(self, initial: GameState, clock):
        """
        Args:
            initial: Starting state (loaded from storage or GameState.new_game)
            clock: IClock supplying the current time
        """
        # A restored state never starts mid-tick
        self._state = replace(initial, is_processing=False)
        self._clock = clock

    @classmethod
    def start_new(cls, clock) -> 'GameStateAggregator':
        return cls(GameState.new_game(clock.now()), clock)

    def current(self) -> GameState:
        """Snapshot of the current state"""
        return self._state

    @property
    def is_processing(self) -> bool:
        return self._state.is_processing

    def is_due(self, now: Optional[datetime] = None) -> bool:
        return self._state.is_due(now if now is not None else self._clock.now())

    def begin_processing(self) -> bool:
        """
        Claim the processing guard.

        Returns:
            True if claimed, False if a tick is already being processed
        """
        if self._state.is_processing:
            return False
        self._state = replace(self._state, is_processing=True)
        return True

    def end_processing(self):
        """Release the processing guard"""
        self._state = replace(self._state, is_processing=False)

    def apply_tick(self) -> GameState:
        """
        Advance the calendar by one day and reschedule the next tick.

        Returns:
            The new state snapshot

        Raises:
            TickNotInProgressError: If the processing guard is not held
        """
        if not self._state.is_processing:
            raise TickNotInProgressError("apply_tick called without holding the processing guard")

        now = self._clock.now()
        self._state = replace(
            self._state,
            date=self._state.date.advance(),
            tick=self._state.tick + 1,
            last_tick_time=now,
            next_tick_time=now + TICK_INTERVAL,
        )
        logger.info(f"Tick {self._state.tick}: {self._state.date.format()}")
        return self._state
