"""httpx wrapper.

Centralizes timeout and the headers every API call carries, so the executor and
callers that bring their own `httpx.AsyncClient` behave the same.
"""

from __future__ import annotations

import httpx

from connectwise.core.domain.models import ClientConfig


def build_headers(config: ClientConfig) -> dict[str, str]:
    """Accept (versioned vendor media type), Cache-Control and Authorization."""

    return {
        "Accept": (
            "application/json; application/vnd.connectwise.com+json; "
            f"version={config.api_version}"
        ),
        "Cache-Control": "no-cache",
        "Authorization": config.auth,
    }


def build_async_client(
    config: ClientConfig,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the client's defaults.

    `transport` lets tests plug an `httpx.MockTransport`.
    """

    headers = build_headers(config)
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        headers=headers,
        transport=transport,
    )
