"""
Configuration management for TaskPane.

Loads settings from config.ini with environment variable overrides.
"""

import configparser
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from taskpane.database import DEFAULT_DB_URL
from taskpane.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LIST_NAMES = ["Work", "Home", "Personal"]


class Config:
    """Application configuration manager."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config file, defaults to ~/.taskpane/config.ini
        """
        self.config_path = config_path or self._default_config_path()
        self._config = configparser.ConfigParser()
        self._load()

    def _default_config_path(self) -> Path:
        return Path.home() / ".taskpane" / "config.ini"

    def _load(self):
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                self._config.read(self.config_path)
                logger.info(f"Loaded configuration from {self.config_path}")
            except configparser.Error as e:
                logger.warning(f"Failed to read config file: {e}. Using defaults.")
        else:
            logger.debug(f"Config file not found at {self.config_path}. Using defaults.")

    def get_database_config(self) -> Dict[str, Any]:
        """
        Get database configuration with environment overrides.

        Environment variables take precedence over config file:
        - TASKPANE_DATABASE_URL

        Returns:
            Dictionary with database configuration
        """
        config = {
            'url': os.getenv('TASKPANE_DATABASE_URL') or
                   self._config.get('database', 'url', fallback=DEFAULT_DB_URL),
        }

        logger.debug(f"Database config: url={config['url']}")

        return config

    def get_display_config(self) -> Dict[str, Any]:
        """
        Get display configuration with environment overrides.

        Environment variables take precedence over config file:
        - TASKPANE_EMPTY_MESSAGE
        - TASKPANE_INPUT_PLACEHOLDER

        Returns:
            Dictionary with display configuration
        """
        config = {
            'empty_message': os.getenv('TASKPANE_EMPTY_MESSAGE') or
                             self._config.get('display', 'empty_message', fallback='No items'),
            'input_placeholder': os.getenv('TASKPANE_INPUT_PLACEHOLDER') or
                                 self._config.get('display', 'input_placeholder', fallback='Add new task'),
        }

        logger.debug(f"Display config: empty_message={config['empty_message']!r}, "
                     f"input_placeholder={config['input_placeholder']!r}")

        return config

    def get_default_lists(self) -> List[str]:
        """
        Get the names of the lists created on first run.

        Read from the comma separated TASKPANE_DEFAULT_LISTS variable or
        the [lists] defaults key.

        Returns:
            List of list names, in display order
        """
        raw = os.getenv('TASKPANE_DEFAULT_LISTS') or self._config.get('lists', 'defaults', fallback='')
        names = [name.strip() for name in raw.split(',') if name.strip()]
        return names or list(DEFAULT_LIST_NAMES)

    def get(self, section: str, key: str, fallback: Any = None) -> Any:
        """
        Get configuration value with fallback.

        Args:
            section: Config section name
            key: Config key name
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        return self._config.get(section, key, fallback=fallback)
