"""Common schemas used across the API."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": str, "details": str | null, "upstream_status": int | null }
    """

    error: str
    details: str | None = None
    upstream_status: int | None = None
