from abc import ABC, abstractmethod
from typing import Optional, List

from tradergame.domain.production.facility import Facility
from tradergame.domain.game.state import GameState


class IFacilityRepository(ABC):
    """Port for facility persistence"""

    @abstractmethod
    def create(self, facility: Facility) -> Facility:
        """Persist new facility, returns facility with creation time set"""
        pass

    @abstractmethod
    def find_by_id(self, facility_id: str) -> Optional[Facility]:
        """Load facility by ID"""
        pass

    @abstractmethod
    def list_by_company(self, company_id: str) -> List[Facility]:
        """List a company's facilities ordered by creation time"""
        pass

    @abstractmethod
    def list_all(self) -> List[Facility]:
        """List every company's facilities ordered by creation time"""
        pass

    @abstractmethod
    def save(self, facility: Facility) -> Facility:
        """
        Persist production state and inventory of an existing facility.

        Raises:
            PersistenceError: If the store rejects the write
        """
        pass


class IGameTimeRepository(ABC):
    """Port for the persisted game clock"""

    @abstractmethod
    def load(self) -> Optional[GameState]:
        """Load saved game clock, None for a new game"""
        pass

    @abstractmethod
    def save(self, state: GameState) -> None:
        """Persist game clock"""
        pass
