"""Account tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..bigcartel_client import BigCartelClient
from ..utils.logging import truncate
from ..utils.projection import project_dict

logger = logging.getLogger("bigcartel_server.resources.accounts")

ACCOUNT_BASE_FIELDS = {"id", "store_name", "subdomain", "url"}


async def bigcartel_account(
    account_id: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get the Big Cartel store account.

    Parameters:
    - account_id: Numeric account id. Omit to get the account the
      credentials belong to.
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Available fields: id, subdomain, store_name, description, contact_email,
        first_name, last_name, url, website, created_at, updated_at,
        under_maintenance, inventory_enabled, artists_enabled, time_zone,
        currency, country, plan, image, links
    Default returns: id, store_name, subdomain, url
    """
    logger.debug("Tool call: bigcartel_account(account_id=%s)", account_id)
    client = BigCartelClient.from_env()
    if account_id:
        account = await client.get_account_by_id(account_id)
    else:
        account = await client.get_account()

    result = project_dict(account.to_dict(), fields, base_fields=ACCOUNT_BASE_FIELDS)
    logger.debug("Tool result: bigcartel_account -> %s", truncate(str(result)))
    return result
