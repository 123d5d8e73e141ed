"""Category tools."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from ..bigcartel_client import BigCartelClient, BigCartelClientError
from ..utils.logging import truncate
from ..utils.projection import project_items

logger = logging.getLogger("bigcartel_server.resources.categories")

CATEGORY_BASE_FIELDS = {"id", "name"}


def _account_id(account_id: str | None) -> str:
    resolved = account_id or os.getenv("BIGCARTEL_ACCOUNT_ID")
    if not resolved:
        raise BigCartelClientError(
            "account_id is required when BIGCARTEL_ACCOUNT_ID is not set."
        )
    return resolved


async def bigcartel_categories(
    account_id: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List the categories of a store account.

    Parameters:
    - account_id: Numeric account id (defaults to BIGCARTEL_ACCOUNT_ID)
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Available fields: id, name, permalink, position
    Default returns: id, name
    """
    logger.debug("Tool call: bigcartel_categories(account_id=%s)", account_id)
    client = BigCartelClient.from_env()
    categories = await client.list_categories(_account_id(account_id))

    items = project_items(
        [c.to_dict() for c in categories], fields, base_fields=CATEGORY_BASE_FIELDS
    )
    result = {"results": items, "total_returned": len(items)}
    logger.debug("Tool result: bigcartel_categories -> %s", truncate(str(result)))
    return result


async def bigcartel_get_category(
    category_id: str,
    account_id: str | None = None,
) -> Dict[str, Any]:
    """Get a single category by id.

    Returns id, name, permalink and position.
    """
    logger.debug(
        "Tool call: bigcartel_get_category(category_id=%s, account_id=%s)",
        category_id, account_id,
    )
    client = BigCartelClient.from_env()
    category = await client.get_category(_account_id(account_id), category_id)
    result = category.to_dict()
    logger.debug("Tool result: bigcartel_get_category -> %s", truncate(str(result)))
    return result


async def bigcartel_create_category(
    name: str,
    account_id: str | None = None,
) -> Dict[str, Any]:
    """Create a new category on a store account.

    The API assigns the permalink and position. Fails unless Big Cartel
    answers 201 Created.
    """
    logger.debug(
        "Tool call: bigcartel_create_category(name=%s, account_id=%s)",
        name, account_id,
    )
    client = BigCartelClient.from_env()
    category = await client.create_category(_account_id(account_id), name)
    result = category.to_dict()
    logger.debug("Tool result: bigcartel_create_category -> %s", truncate(str(result)))
    return result
