import sys
from pathlib import Path

import pytest

# Make tests.fixtures importable as "fixtures" like the rest of the suite expects
sys.path.insert(0, str(Path(__file__).parent))

from fixtures.clock import FakeClock


@pytest.fixture(autouse=True)
def use_test_database(monkeypatch):
    """
    Point the container at a fresh in-memory database for every test.
    """
    from tradergame.configuration.settings import settings
    from tradergame.configuration.container import reset_container, get_engine
    from tradergame.adapters.secondary.persistence.models import metadata

    original_db_path = settings.db_path

    # DATABASE_URL would select PostgreSQL
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("TRADERGAME_DB_PATH", ":memory:")
    settings.db_path = ":memory:"

    reset_container()

    engine = get_engine()
    metadata.create_all(engine)

    yield

    settings.db_path = original_db_path
    reset_container()


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Keep ~/.tradergame/config.json writes inside the test's tmp dir"""
    from tradergame.configuration.config import reset_config

    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def context():
    """Shared context for BDD steps"""
    return {}


@pytest.fixture
def clock():
    """Fake clock installed in the container"""
    from tradergame.configuration.container import set_clock

    fake = FakeClock()
    set_clock(fake)
    return fake


@pytest.fixture
def mediator(clock):
    """Mediator wired to the in-memory database and fake clock"""
    from tradergame.configuration.container import get_mediator
    return get_mediator()
