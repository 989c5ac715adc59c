"""Catalog views built on top of raw Loyverse resources.

- Modifier groups: modifiers deduplicated by name (first occurrence wins)
- Variants: items that have more than one variant
- Aggregate data: five resources fetched concurrently; a failed call yields an
  empty collection plus an error entry instead of failing the whole response
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from loyverse_proxy.schemas import (
    EndpointError,
    LoyverseDataResponse,
    ModifierGroup,
    ModifierGroupsResponse,
    VariantsResponse,
)
from loyverse_proxy.services.loyverse_client import LoyverseClient, UpstreamPayloadError

logger = logging.getLogger("uvicorn.error")

AGGREGATE_RESOURCES = ("items", "categories", "modifiers", "stores", "taxes")


def extract_modifier_groups(payload: Any) -> list[ModifierGroup]:
    """Derive modifier groups from a `modifiers` response body.

    Modifiers without a non-empty string name are skipped. A body without a
    `modifiers` list yields no groups.
    """
    modifiers = payload.get("modifiers") if isinstance(payload, dict) else None
    if not isinstance(modifiers, list):
        return []

    groups: list[ModifierGroup] = []
    seen: set[str] = set()
    for modifier in modifiers:
        if not isinstance(modifier, dict):
            continue
        name = modifier.get("name")
        if not isinstance(name, str) or not name or name in seen:
            continue
        seen.add(name)
        groups.append(
            ModifierGroup(
                id=modifier.get("id"),
                group_name=name,
                created_at=modifier.get("created_at"),
                updated_at=modifier.get("updated_at"),
            )
        )
    return groups


def filter_items_with_variants(payload: Any) -> VariantsResponse:
    """Keep only items with more than one variant.

    Raises:
        UpstreamPayloadError: The body has no `items` list.
    """
    items = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        raise UpstreamPayloadError("Loyverse items response has no 'items' list")

    with_variants = [
        item
        for item in items
        if isinstance(item, dict)
        and isinstance(item.get("variants"), list)
        and len(item["variants"]) > 1
    ]
    return VariantsResponse(
        items_with_variants=with_variants,
        total_items=len(items),
        items_with_variants_count=len(with_variants),
    )


async def get_modifier_groups(client: LoyverseClient) -> ModifierGroupsResponse:
    payload = await client.fetch_resource("modifiers")
    return ModifierGroupsResponse(modifier_groups=extract_modifier_groups(payload))


async def get_items_with_variants(client: LoyverseClient) -> VariantsResponse:
    payload = await client.fetch_resource("items")
    return filter_items_with_variants(payload)


async def fetch_all_data(client: LoyverseClient) -> LoyverseDataResponse:
    """Fetch every aggregate resource concurrently and merge the results.

    All calls are started together and awaited until each one settles.
    Failures are isolated per resource.
    """
    logger.info("Fetching comprehensive Loyverse data...")

    results = await asyncio.gather(
        *(client.fetch_resource(name) for name in AGGREGATE_RESOURCES),
        return_exceptions=True,
    )

    data: dict[str, Any] = {}
    errors: list[EndpointError] = []
    for name, result in zip(AGGREGATE_RESOURCES, results):
        if isinstance(result, Exception):
            logger.warning(f"Loyverse {name} fetch failed: {result}")
            data[name] = {name: []}
            errors.append(EndpointError(endpoint=name, error=str(result)))
        elif isinstance(result, BaseException):
            raise result
        else:
            data[name] = result

    if errors:
        logger.info(f"Comprehensive data fetched with {len(errors)} failed endpoint(s)")
    else:
        logger.info("Comprehensive data fetched successfully")

    return LoyverseDataResponse(**data, errors=errors)
