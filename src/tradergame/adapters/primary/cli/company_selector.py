"""
Company selection helper for CLI commands.

Priority:
1. Explicit --company flag
2. Default from ~/.tradergame/config.json
3. TRADERGAME_COMPANY_ID environment variable
4. Error
"""
import argparse

from tradergame.configuration.config import get_config
from tradergame.configuration.settings import settings


class CompanySelectionError(Exception):
    """Error when company cannot be determined"""
    pass


def get_company_id_from_args(args: argparse.Namespace) -> str:
    """
    Determine the company a command applies to.

    Raises:
        CompanySelectionError: If no company is given or configured
    """
    company_id = getattr(args, 'company', None)
    if company_id:
        return company_id

    company_id = get_config().default_company_id
    if company_id:
        return company_id

    if settings.default_company_id:
        return settings.default_company_id

    raise CompanySelectionError(
        "No company specified. Use --company, set a default with "
        "'tradergame config set-company <id>' or set TRADERGAME_COMPANY_ID."
    )


def add_company_argument(parser: argparse.ArgumentParser):
    parser.add_argument("--company", help="Company ID (defaults to configured company)")
