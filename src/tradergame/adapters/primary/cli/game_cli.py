"""
Game clock CLI commands.

state: show the calendar and time until the next tick
tick:  run one tick now for every facility
run:   start the auto-advance scheduler in the foreground
"""
import argparse
import asyncio
import logging

from tradergame.configuration.container import (
    get_mediator,
    get_clock,
    initialize_game,
    shutdown_game,
)
from tradergame.configuration.settings import settings
from tradergame.application.game.commands.advance_game_tick import AdvanceGameTickCommand
from tradergame.application.game.queries.get_game_state import GetGameStateQuery
from tradergame.adapters.primary.daemon.auto_advance import AutoAdvanceScheduler
from tradergame.domain.calendar.game_date import time_until_next_tick
from tradergame.domain.shared.exceptions import DomainException

logger = logging.getLogger(__name__)


def game_state_command(args: argparse.Namespace) -> int:
    """Handle game state command"""
    try:
        state = asyncio.run(get_mediator().send_async(GetGameStateQuery()))
    except DomainException as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"📅 {state.date.format()}")
    print(f"  Tick: {state.tick}")
    print(f"  Last tick: {state.last_tick_time.isoformat()}")
    print(f"  Next tick: {state.next_tick_time.isoformat()} "
          f"({time_until_next_tick(state.next_tick_time, get_clock().now())})")
    if state.is_processing:
        print("  ⏳ Processing tick...")
    return 0


def game_tick_command(args: argparse.Namespace) -> int:
    """Handle game tick command"""
    try:
        result = asyncio.run(get_mediator().send_async(AdvanceGameTickCommand()))
    except DomainException as e:
        print(f"❌ Error: {e}")
        return 1

    if result.rejected:
        print("⚠️  A tick is already in progress")
        return 1

    print(f"✅ Tick {result.tick}: {result.date.format()}")
    print(f"  Facilities processed: {result.facilities_processed}")
    for completion in result.completions:
        produced = ", ".join(repr(a) for a in completion.applied) or "nothing"
        print(f"  🏭 {completion.facility_id}: {completion.recipe_name} → {produced}")
        if completion.dropped:
            dropped = ", ".join(repr(d) for d in completion.dropped)
            print(f"     ⚠️  Inventory full, dropped {dropped}")
    for error in result.recipe_errors + result.persistence_errors:
        print(f"  ❌ {error.facility_id}: {error.message}")
    if result.error:
        print(f"  ❌ {result.error}")
    return 0


def game_run_command(args: argparse.Namespace) -> int:
    """Handle game run command - blocks until interrupted"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        game_state = initialize_game()
    except DomainException as e:
        print(f"❌ Error: {e}")
        return 1

    scheduler = AutoAdvanceScheduler(
        mediator=get_mediator(),
        game_state=game_state,
        clock=get_clock(),
        poll_interval=args.poll_interval or settings.poll_interval_seconds,
    )

    print("⏱️  Auto-advance running (Ctrl+C to stop)")
    try:
        asyncio.run(scheduler.start())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        shutdown_game()

    print(f"✅ Stopped after {scheduler.ticks_executed} ticks")
    return 0


def setup_game_commands(subparsers):
    """Setup game CLI commands"""
    game_parser = subparsers.add_parser("game", help="Game clock commands")
    game_subparsers = game_parser.add_subparsers(dest="game_command")

    state_parser = game_subparsers.add_parser("state", help="Show game date and next tick")
    state_parser.set_defaults(func=game_state_command)

    tick_parser = game_subparsers.add_parser("tick", help="Advance the game by one tick now")
    tick_parser.set_defaults(func=game_tick_command)

    run_parser = game_subparsers.add_parser("run", help="Run the auto-advance scheduler")
    run_parser.add_argument("--poll-interval", type=float, help="Seconds between schedule checks")
    run_parser.set_defaults(func=game_run_command)
