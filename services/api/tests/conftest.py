"""Shared fixtures.

The app is created at import time and requires a Loyverse token, so one is
set before any `loyverse_proxy` import.
"""

import os

os.environ.setdefault("LOYVERSE_API_TOKEN", "test-token")

from collections.abc import Callable

import httpx
import pytest

from loyverse_proxy.services.loyverse_client import LoyverseClient

UPSTREAM_BASE = "https://upstream.test/v1.0"


@pytest.fixture
def make_loyverse_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], LoyverseClient]:
    """Build a LoyverseClient whose upstream is a MockTransport handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> LoyverseClient:
        return LoyverseClient(
            api_token="test-token",
            base_url=UPSTREAM_BASE,
            transport=httpx.MockTransport(handler),
        )

    return _make
