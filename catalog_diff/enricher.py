# catalog_diff/enricher.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .catalog_lookup import CatalogLookup
from .exceptions import ConfigurationError
from .models import ENRICHABLE_CHANGE_TYPES, ChangeRecord, MenuItemInfo

logger = logging.getLogger(__name__)


def normalize_item_id(item_id) -> str:
    """Render an ItemId the way it appears in exports: 9001, 9001.0 and " 9001 " all give "9001"."""
    if isinstance(item_id, float) and item_id.is_integer():
        return str(int(item_id))
    return str(item_id).strip()


def find_menu_item(menu_items: Sequence[MenuItemInfo], product_id: str) -> Optional[MenuItemInfo]:
    """Return the first menu item whose ItemId matches the product id."""
    for item in menu_items:
        item_id = item.get("ItemId")
        if item_id is not None and normalize_item_id(item_id) == product_id:
            return item
    return None


def ensure_lookup(lookup) -> None:
    """Raise ConfigurationError unless `lookup` exposes a callable `lookup` method."""
    if lookup is None or not callable(getattr(lookup, "lookup", None)):
        raise ConfigurationError("A catalog lookup with a 'lookup' method is required for enrichment")


async def enrich_with_menu_items(
    records: Sequence[ChangeRecord],
    lookup: CatalogLookup,
) -> List[ChangeRecord]:
    """
    Attach catalog menu item details to added and modified records.

    Lookups are grouped by (location id, category id): each distinct pair is
    fetched at most once per call, sequentially, and the result is reused for
    every record that shares it. A failed lookup is logged and counts as an
    empty result for that pair; it never aborts the batch.

    Records that are removed or moved, or whose after-snapshot lacks a
    product, location or category id, come back unchanged.

    Args:
        records: Classified (and possibly sampled) change records.
        lookup (CatalogLookup): Catalog service used to resolve menu items.

    Returns:
        list[ChangeRecord]: Same length and order as `records`.

    Raises:
        ConfigurationError: If `lookup` does not provide a `lookup` coroutine.
    """
    ensure_lookup(lookup)

    # Scoped to this call so repeated runs never see stale menus
    cache: Dict[str, List[MenuItemInfo]] = {}
    enriched: List[ChangeRecord] = []

    for record in records:
        if record.change_type not in ENRICHABLE_CHANGE_TYPES:
            enriched.append(record)
            continue

        product_id = record.after.parsed_field("product").id
        location_id = record.after.parsed_field("location").id
        category_id = record.after.parsed_field("category").id
        if not (product_id and location_id and category_id):
            enriched.append(record)
            continue

        cache_key = f"{location_id}-{category_id}"
        if cache_key not in cache:
            logger.info(f"Fetching menu items for location {location_id}, category {category_id}...")
            try:
                cache[cache_key] = list(await lookup.lookup(category_id, location_id))
            except Exception as e:
                logger.error(
                    f"Failed to fetch menu items for location {location_id}, category {category_id}: {e}"
                )
                cache[cache_key] = []

        menu_item = find_menu_item(cache[cache_key], product_id)
        if menu_item is None:
            logger.warning(
                f"Menu item not found for product ID {product_id} in location {location_id}, category {category_id}"
            )
            enriched.append(record)
            continue

        enriched.append(replace(record, menu_item_info=menu_item))

    return enriched
