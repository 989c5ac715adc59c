"""Loyverse proxy endpoints.

GET /api/loyverse/items            - items passthrough (query forwarded)
GET /api/loyverse/modifiers        - modifiers passthrough
GET /api/loyverse/modifier-groups  - modifiers deduplicated by name
GET /api/loyverse/variants         - items with more than one variant
GET /api/loyverse/data             - items, categories, modifiers, stores, taxes
GET /api/loyverse/{endpoint}       - generic passthrough (query forwarded)

Aliases: /api/items and /api/loyverse-{modifiers,modifier-groups,variants,data}.

Routers are thin: call services for business logic. Upstream failures are
turned into responses by the exception handlers in `loyverse_proxy.main`.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from loyverse_proxy.schemas import (
    LoyverseDataResponse,
    ModifierGroupsResponse,
    VariantsResponse,
)
from loyverse_proxy.services.catalog import (
    fetch_all_data,
    get_items_with_variants,
    get_modifier_groups,
)
from loyverse_proxy.services.loyverse_client import get_loyverse_client

router = APIRouter()
alias_router = APIRouter()


@router.get("/items")
@alias_router.get("/items")
async def get_items(request: Request) -> Any:
    """Forward to Loyverse `items` with the inbound query string."""
    client = get_loyverse_client()
    return await client.fetch_resource("items", request.query_params.multi_items())


@router.get("/modifiers")
@alias_router.get("/loyverse-modifiers")
async def get_modifiers() -> Any:
    """Forward to Loyverse `modifiers`."""
    client = get_loyverse_client()
    return await client.fetch_resource("modifiers")


@router.get("/modifier-groups", response_model=ModifierGroupsResponse)
@alias_router.get("/loyverse-modifier-groups", response_model=ModifierGroupsResponse)
async def get_modifier_groups_view() -> ModifierGroupsResponse:
    """Modifier groups derived from modifiers (first occurrence per name)."""
    return await get_modifier_groups(get_loyverse_client())


@router.get("/variants", response_model=VariantsResponse)
@alias_router.get("/loyverse-variants", response_model=VariantsResponse)
async def get_variants() -> VariantsResponse:
    """Items that have more than one variant, with counts."""
    return await get_items_with_variants(get_loyverse_client())


@router.get("/data", response_model=LoyverseDataResponse)
@alias_router.get("/loyverse-data", response_model=LoyverseDataResponse)
async def get_data() -> LoyverseDataResponse:
    """Aggregate of items, categories, modifiers, stores and taxes.

    Always 200 once aggregation completes; failed resources are listed in
    `errors` and default to an empty collection.
    """
    return await fetch_all_data(get_loyverse_client())


@router.get("/{endpoint:path}")
async def proxy_endpoint(endpoint: str, request: Request) -> Any:
    """Forward any other resource name and the inbound query string."""
    segments = endpoint.strip("/").split("/")
    if any(segment in ("", ".", "..") for segment in segments):
        raise HTTPException(status_code=404, detail="Not found")

    client = get_loyverse_client()
    return await client.fetch_resource("/".join(segments), request.query_params.multi_items())
