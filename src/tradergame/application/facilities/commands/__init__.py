"""Facility commands"""
from .build_facility import BuildFacilityCommand, BuildFacilityHandler
from .start_production import StartProductionCommand, StartProductionHandler
from .stop_production import StopProductionCommand, StopProductionHandler

__all__ = [
    'BuildFacilityCommand',
    'BuildFacilityHandler',
    'StartProductionCommand',
    'StartProductionHandler',
    'StopProductionCommand',
    'StopProductionHandler',
]
