"""
Integration tests for config CLI commands.

The root conftest points Path.home() at the test's tmp dir, so these write
a real config file without touching the user's.
"""
import argparse
import json
from pathlib import Path

from tradergame.adapters.primary.cli.config_cli import (
    set_company_command,
    show_config_command,
    clear_company_command
)
from tradergame.adapters.primary.cli.company_selector import (
    CompanySelectionError,
    get_company_id_from_args
)
from tradergame.configuration.config import get_config, reset_config


class TestSetCompanyCommand:
    """Integration tests for config set-company"""

    def test_set_company_writes_config_file(self, capsys):
        result = set_company_command(argparse.Namespace(company_id="ACME"))

        assert result == 0
        assert "✅ Set default company to ACME" in capsys.readouterr().out

        config_path = Path.home() / ".tradergame" / "config.json"
        assert json.loads(config_path.read_text())["default_company_id"] == "ACME"

    def test_default_company_survives_reload(self):
        set_company_command(argparse.Namespace(company_id="ACME"))
        reset_config()

        assert get_config().default_company_id == "ACME"


class TestShowAndClearCommands:
    """Integration tests for config show/clear-company"""

    def test_show_without_default(self, capsys):
        assert show_config_command(argparse.Namespace()) == 0
        assert "Default company: (not set)" in capsys.readouterr().out

    def test_clear_reports_previous_company(self, capsys):
        set_company_command(argparse.Namespace(company_id="ACME"))
        capsys.readouterr()

        assert clear_company_command(argparse.Namespace()) == 0

        assert "was: ACME" in capsys.readouterr().out
        assert get_config().default_company_id is None

    def test_clear_when_nothing_set(self, capsys):
        assert clear_company_command(argparse.Namespace()) == 0
        assert "No default company was set" in capsys.readouterr().out


class TestCompanySelection:
    """Company resolution order: flag, config, environment"""

    def test_flag_wins_over_config(self):
        get_config().default_company_id = "CONFIGURED"

        assert get_company_id_from_args(argparse.Namespace(company="FLAG")) == "FLAG"

    def test_config_wins_over_environment(self, monkeypatch):
        from tradergame.configuration.settings import settings
        monkeypatch.setattr(settings, "default_company_id", "FROM_ENV")
        get_config().default_company_id = "CONFIGURED"

        assert get_company_id_from_args(argparse.Namespace(company=None)) == "CONFIGURED"

    def test_environment_used_last(self, monkeypatch):
        from tradergame.configuration.settings import settings
        monkeypatch.setattr(settings, "default_company_id", "FROM_ENV")

        assert get_company_id_from_args(argparse.Namespace()) == "FROM_ENV"

    def test_nothing_configured_raises(self, no_default_company):
        try:
            get_company_id_from_args(argparse.Namespace(company=None))
        except CompanySelectionError as e:
            assert "--company" in str(e)
        else:
            raise AssertionError("expected CompanySelectionError")
