"""List recipes query and handler"""
from dataclasses import dataclass
from typing import List, Optional

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.production.catalog import RecipeCatalog
from tradergame.domain.production.recipe import Recipe


@dataclass(frozen=True)
class ListRecipesQuery(Request[List[Recipe]]):
    """Query for catalog recipes, optionally only those a facility type runs"""
    facility_type: Optional[str] = None


class ListRecipesHandler(RequestHandler[ListRecipesQuery, List[Recipe]]):
    """Handler for recipe listings"""

    def __init__(self, catalog: RecipeCatalog):
        self._catalog = catalog

    async def handle(self, request: ListRecipesQuery) -> List[Recipe]:
        if request.facility_type:
            return self._catalog.recipes_for(request.facility_type)
        return self._catalog.all()
