"""Pydantic schemas for API responses."""

from loyverse_proxy.schemas.common import ErrorResponse
from loyverse_proxy.schemas.loyverse import (
    EndpointError,
    LoyverseDataResponse,
    ModifierGroup,
    ModifierGroupsResponse,
    VariantsResponse,
)

__all__ = [
    "ErrorResponse",
    "EndpointError",
    "LoyverseDataResponse",
    "ModifierGroup",
    "ModifierGroupsResponse",
    "VariantsResponse",
]
