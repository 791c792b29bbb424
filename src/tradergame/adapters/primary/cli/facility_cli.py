import argparse
import asyncio

from tradergame.configuration.container import get_mediator
from tradergame.application.facilities.commands.build_facility import BuildFacilityCommand
from tradergame.application.facilities.commands.start_production import StartProductionCommand
from tradergame.application.facilities.commands.stop_production import StopProductionCommand
from tradergame.application.facilities.queries.list_facilities import ListFacilitiesQuery
from tradergame.application.facilities.queries.get_facility import GetFacilityQuery
from tradergame.application.recipes.queries.list_recipes import ListRecipesQuery
from tradergame.domain.production.catalog import RESOURCE_NAMES
from tradergame.domain.production.facility_types import FACILITY_TYPE_CONFIGS
from tradergame.domain.shared.exceptions import DomainException
from .company_selector import get_company_id_from_args, add_company_argument, CompanySelectionError


def _status(facility) -> str:
    if facility.is_producing:
        return f"producing {facility.active_recipe_id} ({facility.progress_ticks or 0} ticks)"
    if facility.active_recipe_id:
        return f"idle ({facility.active_recipe_id} selected)"
    return "idle"


def _icon(facility) -> str:
    config = FACILITY_TYPE_CONFIGS.get(facility.facility_subtype or "")
    return config.icon if config else "🏭"


def list_facilities_command(args: argparse.Namespace) -> int:
    """Handle facility list command"""
    try:
        company_id = get_company_id_from_args(args)
        facilities = asyncio.run(get_mediator().send_async(ListFacilitiesQuery(company_id=company_id)))
    except (CompanySelectionError, DomainException) as e:
        print(f"❌ Error: {e}")
        return 1

    if not facilities:
        print(f"No facilities for company {company_id}")
        return 0

    print(f"Facilities ({len(facilities)}):")
    for facility in facilities:
        inventory = facility.inventory
        print(f"  {_icon(facility)} [{facility.id}] {facility.name} - {_status(facility)} "
              f"- {inventory.current_usage}/{inventory.capacity}")
    return 0


def show_facility_command(args: argparse.Namespace) -> int:
    """Handle facility show command"""
    try:
        facility = asyncio.run(get_mediator().send_async(GetFacilityQuery(facility_id=args.facility_id)))
    except DomainException as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"{_icon(facility)} {facility.name} [{facility.id}]")
    print(f"  Company: {facility.company_id}")
    print(f"  City: {facility.city_id}")
    print(f"  Type: {facility.type}/{facility.facility_subtype or '-'}")
    print(f"  Effectivity: {facility.effectivity:.0%}")
    print(f"  Workers: {facility.worker_count}")
    print(f"  Recipes: {', '.join(facility.available_recipe_ids) or '-'}")
    print(f"  Status: {_status(facility)}")
    print(f"  Inventory ({facility.inventory.current_usage}/{facility.inventory.capacity}):")
    for item in facility.inventory.items:
        print(f"    {RESOURCE_NAMES.get(item.resource_id, item.resource_id)}: {item.quantity}")
    return 0


def build_facility_command(args: argparse.Namespace) -> int:
    """Handle facility build command"""
    try:
        company_id = get_company_id_from_args(args)
        command = BuildFacilityCommand(
            company_id=company_id,
            facility_subtype=args.type,
            city_id=args.city,
            name=args.name
        )
        facility = asyncio.run(get_mediator().send_async(command))
    except (CompanySelectionError, DomainException, ValueError) as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ Built {facility.name} [{facility.id}] - {_status(facility)}")
    return 0


def start_production_command(args: argparse.Namespace) -> int:
    """Handle facility start command"""
    command = StartProductionCommand(
        facility_id=args.facility_id,
        recipe_id=args.recipe,
        require_inputs=args.strict
    )
    try:
        facility = asyncio.run(get_mediator().send_async(command))
    except (DomainException, ValueError) as e:
        print(f"❌ Error: {e}")
        return 1

    if facility.is_producing:
        print(f"✅ {facility.name} is producing {args.recipe}")
    else:
        print(f"⚠️  {facility.name} selected {args.recipe} but lacks inputs, staying idle")
    return 0


def stop_production_command(args: argparse.Namespace) -> int:
    """Handle facility stop command"""
    try:
        facility = asyncio.run(get_mediator().send_async(StopProductionCommand(facility_id=args.facility_id)))
    except DomainException as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ {facility.name} stopped")
    return 0


def list_recipes_command(args: argparse.Namespace) -> int:
    """Handle recipe list command"""
    try:
        recipes = asyncio.run(get_mediator().send_async(ListRecipesQuery(facility_type=args.type)))
    except DomainException as e:
        print(f"❌ Error: {e}")
        return 1

    if not recipes:
        print("No recipes")
        return 0

    for recipe in recipes:
        inputs = ", ".join(repr(i) for i in recipe.inputs) or "nothing"
        outputs = ", ".join(repr(o) for o in recipe.outputs)
        print(f"  [{recipe.id}] {recipe.name}: {inputs} → {outputs} "
              f"in {recipe.processing_ticks} ticks ({', '.join(recipe.facility_types)})")
    return 0


def setup_facility_commands(subparsers):
    """Setup facility and recipe CLI commands"""
    facility_parser = subparsers.add_parser("facility", help="Facility management commands")
    facility_subparsers = facility_parser.add_subparsers(dest="facility_command")

    list_parser = facility_subparsers.add_parser("list", help="List company facilities")
    add_company_argument(list_parser)
    list_parser.set_defaults(func=list_facilities_command)

    show_parser = facility_subparsers.add_parser("show", help="Show facility details")
    show_parser.add_argument("facility_id", help="Facility ID")
    show_parser.set_defaults(func=show_facility_command)

    build_parser = facility_subparsers.add_parser("build", help="Build a new facility")
    add_company_argument(build_parser)
    build_parser.add_argument("--type", required=True, choices=sorted(FACILITY_TYPE_CONFIGS),
                              help="Facility subtype")
    build_parser.add_argument("--city", required=True, help="City ID")
    build_parser.add_argument("--name", help="Display name")
    build_parser.set_defaults(func=build_facility_command)

    start_parser = facility_subparsers.add_parser("start", help="Start a recipe at a facility")
    start_parser.add_argument("facility_id", help="Facility ID")
    start_parser.add_argument("--recipe", required=True, help="Recipe ID")
    start_parser.add_argument("--strict", action="store_true",
                              help="Fail instead of idling when inputs are missing")
    start_parser.set_defaults(func=start_production_command)

    stop_parser = facility_subparsers.add_parser("stop", help="Stop production at a facility")
    stop_parser.add_argument("facility_id", help="Facility ID")
    stop_parser.set_defaults(func=stop_production_command)

    recipe_parser = subparsers.add_parser("recipe", help="Recipe catalog commands")
    recipe_subparsers = recipe_parser.add_subparsers(dest="recipe_command")

    recipe_list_parser = recipe_subparsers.add_parser("list", help="List recipes")
    recipe_list_parser.add_argument("--type", help="Only recipes for this facility type")
    recipe_list_parser.set_defaults(func=list_recipes_command)
