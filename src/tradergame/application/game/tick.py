"""Tick results shared by the manual and persisted tick commands"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from tradergame.domain.calendar.game_date import GameDate
from tradergame.domain.production.advancer import BatchAdvanceResult, ProductionOutcome
from tradergame.domain.production.facility import Facility
from tradergame.domain.shared.value_objects import ResourceAmount
from tradergame.domain.game.state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Completion:
    """A recipe finished at a facility during a tick"""
    facility_id: str
    recipe_id: str
    recipe_name: str
    applied: Tuple[ResourceAmount, ...] = ()
    dropped: Tuple[ResourceAmount, ...] = ()

    @classmethod
    def from_outcome(cls, outcome: ProductionOutcome) -> 'Completion':
        return cls(
            facility_id=outcome.facility_id,
            recipe_id=outcome.recipe_id,
            recipe_name=outcome.recipe_name,
            applied=outcome.applied,
            dropped=outcome.dropped,
        )


@dataclass(frozen=True)
class FacilityError:
    """A facility that could not be advanced or saved"""
    facility_id: str
    message: str


@dataclass(frozen=True)
class GameTickResult:
    """
    Outcome of one tick attempt.

    rejected: another tick was already being processed, nothing happened
    skipped: no facilities to advance, nothing happened
    """
    success: bool
    tick: Optional[int] = None
    date: Optional[GameDate] = None
    completions: Tuple[Completion, ...] = ()
    updated_facilities: Tuple[Facility, ...] = ()
    facilities_processed: int = 0
    recipe_errors: Tuple[FacilityError, ...] = ()
    persistence_errors: Tuple[FacilityError, ...] = ()
    rejected: bool = False
    skipped: bool = False
    error: Optional[str] = None

    @classmethod
    def rejected_attempt(cls) -> 'GameTickResult':
        return cls(success=False, rejected=True, error="Tick already in progress")

    @classmethod
    def skipped_attempt(cls, state: GameState) -> 'GameTickResult':
        return cls(success=False, skipped=True, tick=state.tick, date=state.date,
                   error="No facilities to advance")

    @classmethod
    def failed(cls, error: str) -> 'GameTickResult':
        return cls(success=False, error=error)

    @property
    def dropped_total(self) -> int:
        return sum(d.quantity for c in self.completions for d in c.dropped)


def log_reject():
    logger.warning("ConcurrentAdvanceRejected: a tick is already being processed, ignoring request")


def summarize(batch: BatchAdvanceResult, state: GameState, **extra) -> GameTickResult:
    """Build a successful GameTickResult from an advanced batch"""
    completions = tuple(Completion.from_outcome(o) for o in batch.completions())
    for completion in completions:
        logger.info(f"Facility {completion.facility_id} completed {completion.recipe_name}")

    recipe_errors = tuple(FacilityError(o.facility_id, o.error) for o in batch.errors())

    fields = dict(
        success=True,
        tick=state.tick,
        date=state.date,
        completions=completions,
        updated_facilities=tuple(batch.updated_facilities),
        facilities_processed=len(batch.updated_facilities),
        recipe_errors=recipe_errors,
    )
    fields.update(extra)
    return GameTickResult(**fields)
