"""
Facility entity.

A facility belongs to a company, holds an inventory and runs at most one
recipe at a time. Facilities are immutable snapshots: every operation
returns an updated copy.

Production states:
- Idle: is_producing is False (active recipe may still be set)
- Producing: is_producing is True with an active recipe
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional, Tuple

from ..shared.exceptions import (
    RecipeNotAvailableError,
    InsufficientResourcesError,
)
from .inventory import Inventory
from .recipe import Recipe


@dataclass(frozen=True)
class Facility:
    """Immutable facility snapshot"""
    id: str
    company_id: str
    name: str
    type: str                            # e.g. "production"
    city_id: str
    inventory: Inventory
    available_recipe_ids: Tuple[str, ...]
    facility_subtype: Optional[str] = None   # e.g. "farm", "mill", "bakery"
    effectivity: float = 1.0
    active_recipe_id: Optional[str] = None
    progress_ticks: Optional[int] = None
    is_producing: bool = False
    worker_count: int = 0
    created_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, 'available_recipe_ids', tuple(self.available_recipe_ids))

        if self.effectivity <= 0:
            raise ValueError("effectivity must be positive")
        if self.worker_count < 0:
            raise ValueError("worker_count cannot be negative")
        if self.progress_ticks is not None and self.progress_ticks < 0:
            raise ValueError("progress_ticks cannot be negative")
        if self.active_recipe_id is not None and self.active_recipe_id not in self.available_recipe_ids:
            raise ValueError(
                f"Active recipe '{self.active_recipe_id}' is not available at facility {self.id}"
            )

    @property
    def kind(self) -> str:
        """Subtype when set, otherwise the facility type. Used to match recipes."""
        return self.facility_subtype or self.type

    def offers(self, recipe_id: str) -> bool:
        return recipe_id in self.available_recipe_ids

    def can_produce(self, recipe: Recipe) -> bool:
        """Inventory holds every input the recipe needs"""
        return self.inventory.has_all(recipe.inputs)

    def missing_inputs(self, recipe: Recipe) -> List[Tuple[str, int, int]]:
        return self.inventory.missing(recipe.inputs)

    def start_production(self, recipe: Recipe, require_inputs: bool = False) -> 'Facility':
        """
        Select a recipe and begin producing it from zero progress.

        The facility only enters Producing when the recipe inputs are held;
        otherwise it keeps the recipe selected and stays Idle.

        Args:
            recipe: Recipe to run (must be offered by this facility)
            require_inputs: Raise instead of staying Idle when inputs are missing

        Raises:
            RecipeNotAvailableError: If the facility does not offer the recipe
            InsufficientResourcesError: If require_inputs and inputs are missing
        """
        if not self.offers(recipe.id):
            raise RecipeNotAvailableError(
                f"Recipe {recipe.id} is not available for facility {self.id}"
            )

        has_inputs = self.can_produce(recipe)
        if require_inputs and not has_inputs:
            shortfalls = ", ".join(
                f"{rid} (need {need}, have {have})" for rid, need, have in self.missing_inputs(recipe)
            )
            raise InsufficientResourcesError(
                f"Facility {self.id} cannot start {recipe.id}: missing {shortfalls}"
            )

        return replace(
            self,
            active_recipe_id=recipe.id,
            is_producing=has_inputs,
            progress_ticks=0,
        )

    def stop_production(self) -> 'Facility':
        """Pause production and discard progress. The recipe stays selected."""
        return replace(self, is_producing=False, progress_ticks=0)

    def with_progress(self, progress_ticks: int) -> 'Facility':
        return replace(self, progress_ticks=progress_ticks)

    def __repr__(self) -> str:
        state = "producing" if self.is_producing else "idle"
        return f"Facility({self.id}, {self.kind}, {state})"
