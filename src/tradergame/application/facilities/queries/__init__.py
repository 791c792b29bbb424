"""Facility queries - read-only operations"""
from .list_facilities import ListFacilitiesQuery, ListFacilitiesHandler
from .get_facility import GetFacilityQuery, GetFacilityHandler

__all__ = [
    'ListFacilitiesQuery',
    'ListFacilitiesHandler',
    'GetFacilityQuery',
    'GetFacilityHandler',
]
