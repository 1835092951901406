# catalog_diff/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class Config:
    DEBUG = False
    TESTING = False
    LOG_LEVEL = "INFO"
    OUTPUT_DIR = "result"


class ProductionConfig(Config):
    pass


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class TestingConfig(Config):
    TESTING = True
    DEBUG = True


_CONFIGS = {
    "production": ProductionConfig,
    "development": DevelopmentConfig,
    "testing": TestingConfig,
}


def get_config(env_name: Optional[str] = None):
    """Return the config class for ENV (defaults to production)."""
    name = (env_name or os.getenv("ENV") or "production").lower()
    return _CONFIGS.get(name, ProductionConfig)


@dataclass(frozen=True)
class CatalogSettings:
    """
    Connection settings for the catalog (menu item) lookup service.

    Attributes:
        base_url (str): Service root, e.g. "https://api.example.com".
        menu_item_list_path (str): Path of the GetMenuItemList endpoint.
        security_token (str): Value sent in the SecurityToken header.
        timeout (float): Per request timeout in seconds.
    """
    base_url: str = ""
    menu_item_list_path: str = ""
    security_token: str = ""
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "CatalogSettings":
        # Load environment variables from .env file
        load_dotenv()

        raw_timeout = os.getenv("CATALOG_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            logger.warning(f"Invalid CATALOG_TIMEOUT '{raw_timeout}', using {DEFAULT_TIMEOUT}s")
            timeout = DEFAULT_TIMEOUT

        return cls(
            base_url=os.getenv("CATALOG_BASE_URL", ""),
            menu_item_list_path=os.getenv("CATALOG_MENU_ITEM_LIST_PATH", ""),
            security_token=os.getenv("CATALOG_SECURITY_TOKEN", ""),
            timeout=timeout,
        )

    def validate(self) -> None:
        """
        Check that every required setting is present.

        Raises:
            ConfigurationError: Naming the first missing environment variable.
        """
        if not self.base_url:
            raise ConfigurationError("CATALOG_BASE_URL environment variable is not set")
        if not self.menu_item_list_path:
            raise ConfigurationError("CATALOG_MENU_ITEM_LIST_PATH environment variable is not set")
        if not self.security_token:
            raise ConfigurationError("CATALOG_SECURITY_TOKEN environment variable is not set")


def get_teams_webhook_url() -> str:
    load_dotenv()
    return os.getenv("MS_TEAMS_WEBHOOK_URL", "")
