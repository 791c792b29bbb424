"""List facilities query and handler"""
from dataclasses import dataclass
from typing import List

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.production.facility import Facility
from tradergame.ports.outbound.repositories import IFacilityRepository


@dataclass(frozen=True)
class ListFacilitiesQuery(Request[List[Facility]]):
    """Query for a company's facilities, oldest first"""
    company_id: str


class ListFacilitiesHandler(RequestHandler[ListFacilitiesQuery, List[Facility]]):
    """Handler for listing facilities"""

    def __init__(self, facility_repository: IFacilityRepository):
        self._facility_repo = facility_repository

    async def handle(self, request: ListFacilitiesQuery) -> List[Facility]:
        return self._facility_repo.list_by_company(request.company_id)
