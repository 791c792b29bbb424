#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the working directory before settings are read
dotenv_path = Path.cwd() / '.env'
if dotenv_path.exists():
    load_dotenv(dotenv_path)

from tradergame.configuration.settings import settings
from .game_cli import setup_game_commands
from .facility_cli import setup_facility_commands
from .config_cli import setup_config_commands


def main():
    settings.reload()

    parser = argparse.ArgumentParser(description="Trader game simulation engine")
    subparsers = parser.add_subparsers(dest="command")

    setup_game_commands(subparsers)
    setup_facility_commands(subparsers)
    setup_config_commands(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        sys.exit(args.func(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
