from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Port supplying wall-clock time"""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a timezone-aware UTC datetime"""
        pass
