"""
Application settings.

Values come from the environment (a .env file is loaded by the CLI entry
point) with defaults suitable for local play.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    return float(value) if value else default


@dataclass
class Settings:
    """
    Application settings.

    Attributes:
        db_path: Path to SQLite database file (":memory:" for tests)
        poll_interval_seconds: How often the auto-advance scheduler checks the clock
        default_company_id: Company used when a command names none
    """
    db_path: Path = field(default_factory=lambda: Path(os.environ.get("TRADERGAME_DB_PATH", "var/tradergame.db")))
    poll_interval_seconds: float = field(default_factory=lambda: _env_float("TRADERGAME_POLL_INTERVAL", 1.0))
    default_company_id: Optional[str] = field(default_factory=lambda: os.environ.get("TRADERGAME_COMPANY_ID"))

    def reload(self):
        """Re-read values from the environment"""
        fresh = Settings()
        self.db_path = fresh.db_path
        self.poll_interval_seconds = fresh.poll_interval_seconds
        self.default_company_id = fresh.default_company_id


# Global settings instance
settings = Settings()
