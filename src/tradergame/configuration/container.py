"""
Dependency Injection Container.

Provides singleton instances and factory methods for:
- Database engine and repositories
- Recipe catalog, clock and production advancer
- The game state aggregator (explicit initialize_game/shutdown_game lifecycle)
- Subscription bus
- Mediator with all handlers registered
"""
import logging
from typing import Optional

from tradergame.mediator import Mediator
from tradergame.adapters.secondary.clock import SystemClock
from tradergame.adapters.secondary.persistence.engine import create_engine_from_config
from tradergame.adapters.secondary.persistence.models import metadata
from tradergame.adapters.secondary.persistence.facility_repository_sqlalchemy import FacilityRepositorySQLAlchemy
from tradergame.adapters.secondary.persistence.game_time_repository_sqlalchemy import GameTimeRepositorySQLAlchemy
from tradergame.application.common.behaviors import LoggingBehavior, ValidationBehavior
from tradergame.application.game.subscription_bus import SubscriptionBus
from tradergame.application.game.commands.advance_game_tick import (
    AdvanceGameTickCommand,
    AdvanceGameTickHandler
)
from tradergame.application.game.commands.process_game_tick import (
    ProcessGameTickCommand,
    ProcessGameTickHandler
)
from tradergame.application.game.queries.get_game_state import (
    GetGameStateQuery,
    GetGameStateHandler
)
from tradergame.application.facilities.commands.build_facility import (
    BuildFacilityCommand,
    BuildFacilityHandler
)
from tradergame.application.facilities.commands.start_production import (
    StartProductionCommand,
    StartProductionHandler
)
from tradergame.application.facilities.commands.stop_production import (
    StopProductionCommand,
    StopProductionHandler
)
from tradergame.application.facilities.queries.list_facilities import (
    ListFacilitiesQuery,
    ListFacilitiesHandler
)
from tradergame.application.facilities.queries.get_facility import (
    GetFacilityQuery,
    GetFacilityHandler
)
from tradergame.application.recipes.queries.list_recipes import (
    ListRecipesQuery,
    ListRecipesHandler
)
from tradergame.domain.game.state import GameState, GameStateAggregator
from tradergame.domain.production.advancer import ProductionAdvancer
from tradergame.domain.production.catalog import RecipeCatalog, default_catalog
from tradergame.ports.outbound.clock import IClock
from tradergame.ports.outbound.repositories import IFacilityRepository, IGameTimeRepository
from .settings import settings

logger = logging.getLogger(__name__)

# Singleton instances
_engine = None
_facility_repo = None
_game_time_repo = None
_catalog = None
_clock = None
_advancer = None
_game_state = None
_bus = None
_mediator = None


def get_engine():
    """Get or create the SQLAlchemy engine (schema is created on first use)"""
    global _engine
    if _engine is None:
        _engine = create_engine_from_config(settings.db_path)
        metadata.create_all(_engine)
    return _engine


def get_facility_repository() -> IFacilityRepository:
    global _facility_repo
    if _facility_repo is None:
        _facility_repo = FacilityRepositorySQLAlchemy(get_engine())
    return _facility_repo


def get_game_time_repository() -> IGameTimeRepository:
    global _game_time_repo
    if _game_time_repo is None:
        _game_time_repo = GameTimeRepositorySQLAlchemy(get_engine())
    return _game_time_repo


def get_recipe_catalog() -> RecipeCatalog:
    global _catalog
    if _catalog is None:
        _catalog = default_catalog()
    return _catalog


def get_clock() -> IClock:
    global _clock
    if _clock is None:
        _clock = SystemClock()
    return _clock


def set_clock(clock: IClock):
    """Replace the clock (tests drive time through a fake clock)"""
    global _clock
    _clock = clock


def get_production_advancer() -> ProductionAdvancer:
    global _advancer
    if _advancer is None:
        _advancer = ProductionAdvancer(get_recipe_catalog())
    return _advancer


def get_subscription_bus() -> SubscriptionBus:
    global _bus
    if _bus is None:
        _bus = SubscriptionBus(get_facility_repository())
    return _bus


def initialize_game() -> GameStateAggregator:
    """
    Create the game state aggregator.

    Restores the saved game clock, or starts a new game at the starting
    date and saves it. Calling again returns the existing aggregator.
    """
    global _game_state
    if _game_state is not None:
        return _game_state

    clock = get_clock()
    repo = get_game_time_repository()

    state: Optional[GameState] = repo.load()
    if state is None:
        state = GameState.new_game(clock.now())
        repo.save(state)
        logger.info(f"Started new game on {state.date.format()}")
    else:
        logger.info(f"Restored game at tick {state.tick} ({state.date.format()})")

    _game_state = GameStateAggregator(state, clock)
    return _game_state


def get_game_state() -> GameStateAggregator:
    """Get the game state aggregator, initializing the game if needed"""
    return initialize_game()


def shutdown_game():
    """Persist the game clock, drop subscriptions and release the aggregator"""
    global _game_state
    if _game_state is not None:
        get_game_time_repository().save(_game_state.current())
        logger.info(f"Game saved at tick {_game_state.current().tick}")
    if _bus is not None:
        _bus.cleanup()
    _game_state = None


def get_mediator() -> Mediator:
    """
    Get or create configured mediator with all handlers registered.

    Behaviors execute in order: Logging -> Validation -> Handler
    """
    global _mediator
    if _mediator is None:
        _mediator = Mediator()

        _mediator.register_behavior(LoggingBehavior())
        _mediator.register_behavior(ValidationBehavior())

        facility_repo = get_facility_repository()
        catalog = get_recipe_catalog()
        bus = get_subscription_bus()

        # ===== Game Handlers =====
        # The aggregator is resolved per dispatch so shutdown/initialize cycles are honoured
        _mediator.register_handler(
            AdvanceGameTickCommand,
            lambda: AdvanceGameTickHandler(
                get_game_state(),
                get_production_advancer(),
                facility_repo,
                get_game_time_repository(),
                bus
            )
        )
        _mediator.register_handler(
            ProcessGameTickCommand,
            lambda: ProcessGameTickHandler(get_game_state(), get_production_advancer())
        )
        _mediator.register_handler(
            GetGameStateQuery,
            lambda: GetGameStateHandler(get_game_state())
        )

        # ===== Facility Handlers =====
        _mediator.register_handler(
            BuildFacilityCommand,
            lambda: BuildFacilityHandler(facility_repo, catalog, bus)
        )
        _mediator.register_handler(
            StartProductionCommand,
            lambda: StartProductionHandler(facility_repo, catalog, bus)
        )
        _mediator.register_handler(
            StopProductionCommand,
            lambda: StopProductionHandler(facility_repo, bus)
        )
        _mediator.register_handler(
            ListFacilitiesQuery,
            lambda: ListFacilitiesHandler(facility_repo)
        )
        _mediator.register_handler(
            GetFacilityQuery,
            lambda: GetFacilityHandler(facility_repo)
        )

        # ===== Recipe Handlers =====
        _mediator.register_handler(
            ListRecipesQuery,
            lambda: ListRecipesHandler(catalog)
        )

    return _mediator


def reset_container():
    """
    Reset all singleton instances.

    Useful for testing to ensure clean state between tests.
    """
    global _engine, _facility_repo, _game_time_repo, _catalog, _clock
    global _advancer, _game_state, _bus, _mediator

    if _engine is not None:
        _engine.dispose()

    _engine = None
    _facility_repo = None
    _game_time_repo = None
    _catalog = None
    _clock = None
    _advancer = None
    _game_state = None
    _bus = None
    _mediator = None
