"""
Configuration CLI commands.

Manages the default company stored in ~/.tradergame/config.json
"""
import argparse

from tradergame.configuration.config import get_config


def set_company_command(args: argparse.Namespace) -> int:
    """Set default company"""
    try:
        get_config().default_company_id = args.company_id
    except OSError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ Set default company to {args.company_id}")
    print("\nYou can now run commands without --company:")
    print("  tradergame facility list")
    print("  tradergame game tick")
    return 0


def show_config_command(args: argparse.Namespace) -> int:
    """Show current configuration"""
    config = get_config()
    print(f"Config file: {config.config_path}")
    print(f"  Default company: {config.default_company_id or '(not set)'}")
    return 0


def clear_company_command(args: argparse.Namespace) -> int:
    """Clear default company setting"""
    config = get_config()
    old_company = config.default_company_id

    try:
        config.clear_default_company()
    except OSError as e:
        print(f"❌ Error: {e}")
        return 1

    if old_company:
        print(f"✅ Cleared default company (was: {old_company})")
    else:
        print("✅ No default company was set")
    return 0


def setup_config_commands(subparsers):
    """Setup config CLI commands"""
    config_parser = subparsers.add_parser("config", help="CLI configuration")
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    set_parser = config_subparsers.add_parser("set-company", help="Set default company")
    set_parser.add_argument("company_id", help="Company ID")
    set_parser.set_defaults(func=set_company_command)

    show_parser = config_subparsers.add_parser("show", help="Show configuration")
    show_parser.set_defaults(func=show_config_command)

    clear_parser = config_subparsers.add_parser("clear-company", help="Clear default company")
    clear_parser.set_defaults(func=clear_company_command)
