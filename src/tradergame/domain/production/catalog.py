"""
Recipe catalog.

Read-only lookup of recipes by id and by facility type. The catalog is
injected wherever recipes are resolved so tests can supply their own.
"""
from typing import Any, Dict, Iterable, List

from ..shared.exceptions import RecipeNotFoundError
from ..shared.value_objects import amounts
from .recipe import Recipe

RESOURCE_NAMES = {
    'grain': 'Grain',
    'flour': 'Flour',
    'bread': 'Bread',
}


class RecipeCatalog:
    """Immutable set of recipes keyed by id"""

    def __init__(self, recipes: Iterable[Recipe]):
        self._recipes: Dict[str, Recipe] = {}
        for recipe in recipes:
            if recipe.id in self._recipes:
                raise ValueError(f"Duplicate recipe id: {recipe.id}")
            self._recipes[recipe.id] = recipe

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> 'RecipeCatalog':
        """
        Build a catalog from plain dicts.

        Each record has id, name, processing_ticks, facility_types and
        inputs/outputs as lists of {"resource_id", "quantity"} dicts.
        """
        recipes = []
        for record in records:
            recipes.append(Recipe(
                id=record['id'],
                name=record.get('name', record['id']),
                inputs=amounts((i['resource_id'], i['quantity']) for i in record.get('inputs', [])),
                outputs=amounts((o['resource_id'], o['quantity']) for o in record.get('outputs', [])),
                processing_ticks=record.get('processing_ticks', 1),
                facility_types=tuple(record.get('facility_types', ())),
            ))
        return cls(recipes)

    def lookup(self, recipe_id: str) -> Recipe:
        """
        Resolve a recipe by id.

        Raises:
            RecipeNotFoundError: If the id is unknown
        """
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(f"Recipe '{recipe_id}' not found")
        return recipe

    def recipes_for(self, facility_type: str) -> List[Recipe]:
        """All recipes that run at the given facility type, possibly none"""
        return [r for r in self._recipes.values() if r.runs_at(facility_type)]

    def all(self) -> List[Recipe]:
        return list(self._recipes.values())

    def __contains__(self, recipe_id: str) -> bool:
        return recipe_id in self._recipes

    def __len__(self) -> int:
        return len(self._recipes)


def default_catalog() -> RecipeCatalog:
    """Grain to flour to bread production chain"""
    return RecipeCatalog([
        Recipe(
            id='grow_grain',
            name='Grow Grain',
            inputs=(),
            outputs=amounts([('grain', 1)]),
            processing_ticks=2,
            facility_types=('farm',),
        ),
        Recipe(
            id='mill_grain',
            name='Mill Grain',
            inputs=amounts([('grain', 2)]),
            outputs=amounts([('flour', 1)]),
            processing_ticks=1,
            facility_types=('mill',),
        ),
        Recipe(
            id='bake_bread',
            name='Bake Bread',
            inputs=amounts([('flour', 2)]),
            outputs=amounts([('bread', 1)]),
            processing_ticks=1,
            facility_types=('bakery',),
        ),
    ])
