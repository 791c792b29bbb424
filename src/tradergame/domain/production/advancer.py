"""
Production advancer.

Advances a facility's production by one tick. Progress accumulates while a
facility is Producing. When progress reaches the recipe's processing_ticks
the recipe completes:

1. Inputs are consumed (if they have disappeared the facility goes Idle)
2. Outputs, scaled by effectivity, are added up to remaining capacity
3. Output beyond capacity is dropped and reported on the outcome
4. Progress resets to 0; the facility keeps producing only while the
   recipe inputs are still held
"""
import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from ..shared.exceptions import RecipeNotFoundError
from ..shared.value_objects import ResourceAmount
from .catalog import RecipeCatalog
from .facility import Facility

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductionOutcome:
    """Result of advancing one facility by one tick"""
    facility: Facility
    advanced: bool = False
    completed: bool = False
    stalled: bool = False
    recipe_id: Optional[str] = None
    recipe_name: Optional[str] = None
    consumed: Tuple[ResourceAmount, ...] = ()
    requested: Tuple[ResourceAmount, ...] = ()
    applied: Tuple[ResourceAmount, ...] = ()
    dropped: Tuple[ResourceAmount, ...] = ()
    error: Optional[str] = None

    @property
    def facility_id(self) -> str:
        return self.facility.id


@dataclass(frozen=True)
class BatchAdvanceResult:
    """Updated facilities and one outcome per facility, in input order"""
    updated_facilities: List[Facility] = field(default_factory=list)
    outcomes: List[ProductionOutcome] = field(default_factory=list)

    def completions(self) -> List[ProductionOutcome]:
        return [o for o in self.outcomes if o.completed]

    def errors(self) -> List[ProductionOutcome]:
        return [o for o in self.outcomes if o.error]


class ProductionAdvancer:
    """Applies one tick of production to facility snapshots"""

    def __init__(self, catalog: RecipeCatalog):
        self._catalog = catalog

    def advance_one_tick(self, facility: Facility) -> ProductionOutcome:
        """
        Advance a single facility by one tick.

        Args:
            facility: Facility snapshot

        Returns:
            ProductionOutcome carrying the updated facility

        Raises:
            RecipeNotFoundError: If the active recipe is not in the catalog
        """
        if not facility.is_producing or facility.active_recipe_id is None:
            return ProductionOutcome(facility=facility)

        recipe = self._catalog.lookup(facility.active_recipe_id)
        progress = (facility.progress_ticks or 0) + 1

        if progress < recipe.processing_ticks:
            return ProductionOutcome(
                facility=facility.with_progress(progress),
                advanced=True,
                recipe_id=recipe.id,
                recipe_name=recipe.name,
            )

        # Completion
        if not facility.can_produce(recipe):
            logger.warning(
                f"Facility {facility.id} completed {recipe.id} without inputs, going idle"
            )
            return ProductionOutcome(
                facility=replace(facility, progress_ticks=0, is_producing=False),
                advanced=True,
                stalled=True,
                recipe_id=recipe.id,
                recipe_name=recipe.name,
            )

        inventory = facility.inventory.remove_all(recipe.inputs)
        requested = recipe.scaled_outputs(facility.effectivity)
        inventory, applied = inventory.add_all(requested)

        dropped = tuple(
            req.with_quantity(req.quantity - app.quantity)
            for req, app in zip(requested, applied)
            if req.quantity > app.quantity
        )
        if dropped:
            logger.warning(
                f"Facility {facility.id} inventory full, dropped {list(dropped)} from {recipe.id}"
            )

        keeps_producing = inventory.has_all(recipe.inputs)
        updated = replace(
            facility,
            inventory=inventory,
            progress_ticks=0,
            is_producing=keeps_producing,
        )

        return ProductionOutcome(
            facility=updated,
            advanced=True,
            completed=True,
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            consumed=recipe.inputs,
            requested=requested,
            applied=applied,
            dropped=dropped,
        )

    def advance_all(self, facilities: Sequence[Facility]) -> BatchAdvanceResult:
        """
        Advance every facility independently.

        A facility whose active recipe is missing from the catalog is
        returned unchanged with the error recorded on its outcome.
        """
        updated: List[Facility] = []
        outcomes: List[ProductionOutcome] = []

        for facility in facilities:
            try:
                outcome = self.advance_one_tick(facility)
            except RecipeNotFoundError as e:
                logger.error(f"Facility {facility.id} skipped: {e}")
                outcome = ProductionOutcome(
                    facility=facility,
                    recipe_id=facility.active_recipe_id,
                    error=str(e),
                )

            updated.append(outcome.facility)
            outcomes.append(outcome)

        return BatchAdvanceResult(updated_facilities=updated, outcomes=outcomes)
