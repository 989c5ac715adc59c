"""Loyverse API client.

Every route goes through `LoyverseClient.fetch_resource`:
- Resource names are path segments under the configured base URL
- Filters are query parameters (None values are dropped)
- A static bearer token authenticates every call

Single attempt per call: no retries, no caching, no pagination.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from loyverse_proxy.settings import get_settings

logger = logging.getLogger("uvicorn.error")

QueryParams = Mapping[str, Any] | Iterable[tuple[str, Any]]


class LoyverseError(RuntimeError):
    """Base class for failures talking to the Loyverse API."""


class UpstreamError(LoyverseError):
    """Loyverse answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str, endpoint: str = ""):
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        super().__init__(f"Loyverse API error: {status_code} - {body}")


class TransportError(LoyverseError):
    """Loyverse could not be reached, or its response was not JSON."""


class UpstreamPayloadError(LoyverseError):
    """Loyverse returned JSON without the collection we need to reshape."""


def clean_params(params: QueryParams | None) -> list[tuple[str, str]]:
    """Flatten query parameters into (key, value) pairs, dropping None values.

    Repeated keys (e.g. from a multi-valued inbound query string) are kept as
    separate pairs.
    """
    if not params:
        return []
    pairs = params.items() if isinstance(params, Mapping) else params
    cleaned: list[tuple[str, str]] = []
    for key, value in pairs:
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned.append((str(key), str(value)))
    return cleaned


class LoyverseClient:
    """Client for Loyverse REST resources."""

    def __init__(
        self,
        api_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client; unset arguments fall back to settings."""
        settings = get_settings()
        self.api_token = api_token or settings.loyverse_api_token.get_secret_value()
        self.base_url = (base_url or settings.loyverse_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.loyverse_timeout
        self.debug = settings.loyverse_debug
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bearer {self.api_token}",
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    def build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.strip('/')}"

    async def fetch_resource(self, endpoint: str, params: QueryParams | None = None) -> Any:
        """Fetch a Loyverse resource and return its JSON body unmodified.

        Args:
            endpoint: Resource name (e.g. "items", "taxes", "items/<id>").
            params: Query parameters; None values are omitted.

        Returns:
            Parsed JSON body.

        Raises:
            UpstreamError: Loyverse returned a non-2xx status.
            TransportError: Network failure or non-JSON body.
        """
        url = self.build_url(endpoint)
        query = clean_params(params)

        client = await self._get_client()
        request = client.build_request("GET", url, params=query)
        logger.info(f"Making request to Loyverse API: {request.url}")

        try:
            response = await client.send(request)
        except httpx.HTTPError as e:
            logger.error(f"Loyverse API request failed for {endpoint}: {e!r}")
            raise TransportError(f"Loyverse API request failed: {e!r}") from e

        logger.info(f"Loyverse API response status: {response.status_code}")

        if not response.is_success:
            logger.error(f"Loyverse API error: {response.status_code} - {response.text[:500]}")
            raise UpstreamError(response.status_code, response.text, endpoint)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Loyverse API returned invalid JSON for {endpoint}: {e}") from e

        if self.debug:
            logger.info(
                f"Loyverse API response for {endpoint}:\n"
                f"{json.dumps(data, indent=2, ensure_ascii=False)}"
            )

        return data


# Singleton client instance
_client: LoyverseClient | None = None


def get_loyverse_client() -> LoyverseClient:
    """Get Loyverse client singleton."""
    global _client
    if _client is None:
        _client = LoyverseClient()
    return _client


async def close_loyverse_client() -> None:
    """Close the singleton client (application shutdown)."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
