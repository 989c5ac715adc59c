"""Schemas for the Loyverse proxy endpoints (/api/loyverse/*).

Upstream bodies are passed through as plain dicts; only the shapes computed
in-process are modelled here.
"""

from typing import Any

from pydantic import BaseModel, Field


class ModifierGroup(BaseModel):
    """First modifier seen for a given name.

    Loyverse has no modifier-group resource, so groups are approximated by
    deduplicating modifiers on `name`.
    """

    id: Any = None
    group_name: str
    created_at: Any = None
    updated_at: Any = None


class ModifierGroupsResponse(BaseModel):
    """Response payload for GET /api/loyverse/modifier-groups."""

    modifier_groups: list[ModifierGroup] = Field(default_factory=list)


class VariantsResponse(BaseModel):
    """Response payload for GET /api/loyverse/variants."""

    items_with_variants: list[dict[str, Any]] = Field(default_factory=list)
    total_items: int = Field(ge=0)
    items_with_variants_count: int = Field(ge=0)


class EndpointError(BaseModel):
    """A failed sub-call of the aggregate endpoint."""

    endpoint: str
    error: str


class LoyverseDataResponse(BaseModel):
    """Response payload for GET /api/loyverse/data.

    Each resource holds the upstream body, or an empty collection
    (e.g. {"items": []}) when that call failed.
    """

    items: Any
    categories: Any
    modifiers: Any
    stores: Any
    taxes: Any
    errors: list[EndpointError] = Field(default_factory=list)
