# catalog_diff/notifier.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from .config import get_teams_webhook_url
from .exceptions import ConfigurationError, NotificationError
from .models import REMOVED, ChangeRecord

logger = logging.getLogger(__name__)

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"


def _text_cell(value: Any, style: str = "good") -> Dict[str, Any]:
    return {
        "type": "TableCell",
        "style": style,
        "items": [
            {
                "type": "TextBlock",
                "size": "small",
                "text": "" if value is None else str(value),
                "wrap": True,
            }
        ],
    }


def _image_cell(url: str, style: str = "good") -> Dict[str, Any]:
    if not url:
        return _text_cell("", style)
    return {
        "type": "TableCell",
        "style": style,
        "items": [
            {
                "type": "Image",
                "url": url,
                "size": "Auto",
                "selectAction": {"type": "Action.OpenUrl", "url": url},
            }
        ],
    }


def _header_row(titles: Sequence[str]) -> Dict[str, Any]:
    return {
        "type": "TableRow",
        "style": "accent",
        "cells": [
            {
                "type": "TableCell",
                "items": [
                    {"type": "TextBlock", "size": "small", "text": title, "wrap": True, "weight": "Bolder"}
                ],
            }
            for title in titles
        ],
    }


def _image_url(record: ChangeRecord) -> str:
    info = record.menu_item_info or {}
    return str(info.get("ItemImageURL") or "")


def build_adaptive_card(title: str, records: Sequence[ChangeRecord]) -> Dict[str, Any]:
    """
    Build an MS Teams adaptive card listing change records as a table.

    Removed records are shown with their before-snapshot, everything else
    with the after-snapshot. An image column is added when any record carries
    a menu item image.

    Args:
        title (str): Card heading.
        records: Records to list, one table row each.

    Returns:
        dict: Adaptive card content (schema 1.5).
    """
    with_images = any(_image_url(record) for record in records)

    titles = ["Location", "Category", "Product", "Change"]
    columns: List[Dict[str, int]] = [{"width": 15}, {"width": 25}, {"width": 35}, {"width": 10}]
    if with_images:
        titles.append("Image")
        columns = [{"width": 10}, {"width": 20}, {"width": 20}, {"width": 10}, {"width": 40}]

    rows = [_header_row(titles)]
    for record in records:
        snapshot = record.before if record.change_type == REMOVED else record.after
        cells = [
            _text_cell(snapshot.location),
            _text_cell(snapshot.category),
            _text_cell(snapshot.product),
            _text_cell(record.change_type, style="attention" if record.change_type == REMOVED else "good"),
        ]
        if with_images:
            cells.append(_image_cell(_image_url(record)))
        rows.append({"type": "TableRow", "cells": cells})

    body: List[Dict[str, Any]] = [
        {
            "type": "TextBlock",
            "size": "large",
            "text": title,
            "weight": "bolder",
            "color": "attention",
            "style": "heading",
            "wrap": True,
        },
        {
            "type": "Table",
            "gridStyle": "accent",
            "firstRowAsHeaders": True,
            "columns": columns,
            "rows": rows,
        },
    ]

    return {
        "type": "AdaptiveCard",
        "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
        "version": "1.5",
        "msteams": {"width": "Full"},
        "body": body,
    }


def send_adaptive_card(card: Dict[str, Any], webhook_url: Optional[str] = None, http_client=None) -> None:
    """
    Post an adaptive card to an MS Teams incoming webhook.

    Args:
        card (dict): Card content from `build_adaptive_card`.
        webhook_url (str): Target webhook; falls back to MS_TEAMS_WEBHOOK_URL.
        http_client: Object exposing `post(url, json=..., timeout=...)`; defaults to `requests`.

    Raises:
        ConfigurationError: If no webhook URL is available.
        NotificationError: If the webhook call fails.
    """
    url = webhook_url or get_teams_webhook_url()
    if not url:
        raise ConfigurationError("MS Teams webhook URL must be provided or set in MS_TEAMS_WEBHOOK_URL")

    message = {
        "type": "message",
        "attachments": [
            {
                "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
                "content": card,
            }
        ],
    }

    client = http_client or requests
    try:
        response = client.post(url, json=message, timeout=30)
    except requests.exceptions.RequestException as e:
        logger.error(f"MS Teams webhook request failed: {e}")
        raise NotificationError(f"Failed to send message to MS Teams: {e}") from e

    if not response.ok:
        logger.error(f"MS Teams webhook error response: {response.status_code} {response.text}")
        raise NotificationError(
            f"Failed to send message to MS Teams: {response.status_code} {response.reason}. {response.text}"
        )

    logger.info("Message sent to MS Teams successfully")
