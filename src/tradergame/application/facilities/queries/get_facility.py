"""Get facility query and handler"""
from dataclasses import dataclass

from tradergame.mediator import Request, RequestHandler
from tradergame.domain.production.facility import Facility
from tradergame.domain.shared.exceptions import FacilityNotFoundError
from tradergame.ports.outbound.repositories import IFacilityRepository


@dataclass(frozen=True)
class GetFacilityQuery(Request[Facility]):
    """Query for a single facility"""
    facility_id: str


class GetFacilityHandler(RequestHandler[GetFacilityQuery, Facility]):
    """
    Handler for facility lookups.

    Raises:
        FacilityNotFoundError: If the facility does not exist
    """

    def __init__(self, facility_repository: IFacilityRepository):
        self._facility_repo = facility_repository

    async def handle(self, request: GetFacilityQuery) -> Facility:
        facility = self._facility_repo.find_by_id(request.facility_id)
        if facility is None:
            raise FacilityNotFoundError(f"Facility '{request.facility_id}' not found")
        return facility
