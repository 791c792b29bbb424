"""
Shared fixtures for CLI integration tests.

These fixtures support TRUE integration testing by:
1. Using real container with test database (via root conftest.py)
2. Providing real repositories from container
3. Driving game time through the fake clock instead of sleeping
"""
import pytest

from tradergame.configuration.container import (
    get_facility_repository,
    get_game_time_repository
)


@pytest.fixture
def facility_repo():
    """
    Get real FacilityRepository from container.

    Uses test database configured by root conftest.py.
    Each test gets a fresh, isolated database.
    """
    return get_facility_repository()


@pytest.fixture
def game_time_repo():
    """Get real GameTimeRepository from container"""
    return get_game_time_repository()


@pytest.fixture
def no_default_company(monkeypatch):
    """Make sure neither config nor environment supplies a company"""
    from tradergame.configuration.settings import settings
    monkeypatch.setattr(settings, "default_company_id", None)
