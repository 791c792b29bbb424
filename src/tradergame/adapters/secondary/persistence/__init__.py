"""SQLAlchemy Core persistence adapters"""
from .facility_repository_sqlalchemy import FacilityRepositorySQLAlchemy
from .game_time_repository_sqlalchemy import GameTimeRepositorySQLAlchemy

__all__ = [
    'FacilityRepositorySQLAlchemy',
    'GameTimeRepositorySQLAlchemy',
]
