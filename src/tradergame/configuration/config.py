"""
User configuration for the tradergame CLI.

Stores preferences such as the default company in ~/.tradergame/config.json
"""
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class Config:
    """User configuration backed by a JSON file"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to config file. Defaults to ~/.tradergame/config.json
        """
        if config_path:
            self.config_path = config_path
        else:
            self.config_path = Path.home() / ".tradergame" / "config.json"

        self._config: Dict[str, Any] = {}
        self._load()

    def _load(self):
        """Load configuration from file"""
        if not self.config_path.exists():
            logger.debug(f"Config file not found at {self.config_path}, using defaults")
            self._config = {}
            return

        try:
            with open(self.config_path, 'r') as f:
                self._config = json.load(f)
            logger.debug(f"Loaded config from {self.config_path}")
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in config file: {e}, using defaults")
            self._config = {}
        except OSError as e:
            logger.warning(f"Error loading config: {e}, using defaults")
            self._config = {}

    def _save(self):
        """Save configuration to file"""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(self._config, f, indent=2)

            logger.debug(f"Saved config to {self.config_path}")
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            raise

    @property
    def default_company_id(self) -> Optional[str]:
        """Get default company ID"""
        return self._config.get('default_company_id')

    @default_company_id.setter
    def default_company_id(self, company_id: Optional[str]):
        """Set default company ID"""
        if company_id is None:
            self._config.pop('default_company_id', None)
        else:
            self._config['default_company_id'] = company_id
        self._save()

    def clear_default_company(self):
        self.default_company_id = None
        logger.info("Cleared default company")


_config: Optional[Config] = None


def get_config() -> Config:
    """Get global config instance"""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Reset global config instance (useful for testing)"""
    global _config
    _config = None
