# catalog_diff/catalog_lookup.py
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import requests

from .config import CatalogSettings
from .exceptions import CatalogLookupError
from .models import MenuItemInfo

logger = logging.getLogger(__name__)


class CatalogLookup:
    """
    Narrow interface the enricher talks to.

    Implementations return every menu item listed for one (category, location)
    pair. Raising is allowed; the enricher treats a failure as "no items".
    """

    async def lookup(self, category_id: str, location_id: str) -> List[MenuItemInfo]:
        raise NotImplementedError


class MenuItemClient(CatalogLookup):
    """
    HTTP client for the GetMenuItemList endpoint.

    Requests go to <base_url>/<menu_item_list_path>/<category_id>/<location_id>
    with the security token in a `SecurityToken` header.
    """

    def __init__(self, settings: Optional[CatalogSettings] = None, http_client=None):
        """
        Args:
            settings (CatalogSettings): Connection settings; read from the environment when omitted.
            http_client: Object exposing `get(url, headers=..., timeout=...)`; defaults to `requests`.

        Raises:
            ConfigurationError: If a required setting is missing.
        """
        self.settings = settings or CatalogSettings.from_env()
        self.settings.validate()
        self.http_client = http_client or requests

    def build_url(self, category_id: str, location_id: str) -> str:
        base_url = self.settings.base_url.rstrip("/")
        path = self.settings.menu_item_list_path.strip("/")
        return f"{base_url}/{path}/{category_id}/{location_id}"

    def get_menu_item_list(self, category_id: str, location_id: str) -> List[MenuItemInfo]:
        """
        Fetch the menu items for a category at a location (blocking).

        Returns:
            list: Items from `GetMenuItemListResult.Data`, empty when the payload has none.

        Raises:
            CatalogLookupError: On transport errors, HTTP error status or a non-JSON body.
        """
        url = self.build_url(category_id, location_id)
        headers = {"SecurityToken": self.settings.security_token}

        try:
            response = self.http_client.get(url, headers=headers, timeout=self.settings.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "N/A"
            raise CatalogLookupError(f"Failed to fetch menu item list: {e} (Status: {status})") from e
        except requests.exceptions.RequestException as e:
            raise CatalogLookupError(f"Failed to fetch menu item list: {e} (Status: N/A)") from e

        # requests.exceptions.JSONDecodeError is a ValueError too
        try:
            data = response.json()
        except ValueError as e:
            raise CatalogLookupError(f"Menu item list response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CatalogLookupError(f"Unexpected menu item list payload: {type(data).__name__}")

        result = data.get("GetMenuItemListResult") or {}
        return list(result.get("Data") or [])

    async def lookup(self, category_id: str, location_id: str) -> List[MenuItemInfo]:
        return await asyncio.to_thread(self.get_menu_item_list, category_id, location_id)
