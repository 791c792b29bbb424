"""Per-subtype defaults used when a new facility is built"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..shared.exceptions import UnknownFacilityTypeError

DEFAULT_INVENTORY_CAPACITY = 1000
DEFAULT_EFFECTIVITY = 1.0
DEFAULT_WORKER_COUNT = 0
DEFAULT_FACILITY_TYPE = 'production'


@dataclass(frozen=True)
class FacilityTypeConfig:
    """Build-time configuration for a facility subtype"""
    id: str
    name: str
    available_recipe_ids: Tuple[str, ...]
    auto_start_recipe_id: Optional[str] = None
    inventory_capacity: int = DEFAULT_INVENTORY_CAPACITY
    effectivity: float = DEFAULT_EFFECTIVITY
    icon: str = '🏭'


FACILITY_TYPE_CONFIGS: Dict[str, FacilityTypeConfig] = {
    'farm': FacilityTypeConfig(
        id='farm',
        name='Farm',
        available_recipe_ids=('grow_grain',),
        auto_start_recipe_id='grow_grain',  # needs no inputs
        icon='🌾',
    ),
    'mill': FacilityTypeConfig(
        id='mill',
        name='Mill',
        available_recipe_ids=('mill_grain',),
        icon='⚙️',
    ),
    'bakery': FacilityTypeConfig(
        id='bakery',
        name='Bakery',
        available_recipe_ids=('bake_bread',),
        icon='🍞',
    ),
}


def get_facility_type_config(facility_subtype: str) -> FacilityTypeConfig:
    """
    Look up build configuration for a subtype.

    Raises:
        UnknownFacilityTypeError: If the subtype has no configuration
    """
    config = FACILITY_TYPE_CONFIGS.get(facility_subtype)
    if config is None:
        known = ", ".join(sorted(FACILITY_TYPE_CONFIGS))
        raise UnknownFacilityTypeError(
            f"Unknown facility type '{facility_subtype}' (known: {known})"
        )
    return config
