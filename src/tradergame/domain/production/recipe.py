from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

from ..shared.value_objects import ResourceAmount


def scale_quantity(quantity: int, effectivity: float) -> int:
    """Scale a quantity by facility effectivity, rounding half up"""
    scaled = Decimal(quantity) * Decimal(str(effectivity))
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Recipe:
    """
    Immutable production recipe.

    Converts inputs into outputs over processing_ticks ticks. A recipe with
    no inputs produces from nothing (e.g. farming).
    """
    id: str
    name: str
    inputs: Tuple[ResourceAmount, ...]
    outputs: Tuple[ResourceAmount, ...]
    processing_ticks: int
    facility_types: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.id:
            raise ValueError("recipe id cannot be empty")
        if self.processing_ticks < 1:
            raise ValueError("processing_ticks must be at least 1")
        # Accept lists from callers but store tuples
        object.__setattr__(self, 'inputs', tuple(self.inputs))
        object.__setattr__(self, 'outputs', tuple(self.outputs))
        object.__setattr__(self, 'facility_types', tuple(self.facility_types))

    def has_inputs(self) -> bool:
        return len(self.inputs) > 0

    def runs_at(self, facility_type: str) -> bool:
        return facility_type in self.facility_types

    def scaled_outputs(self, effectivity: float) -> Tuple[ResourceAmount, ...]:
        """Outputs multiplied by effectivity"""
        return tuple(
            output.with_quantity(scale_quantity(output.quantity, effectivity))
            for output in self.outputs
        )

    def __repr__(self) -> str:
        return f"Recipe({self.id})"
