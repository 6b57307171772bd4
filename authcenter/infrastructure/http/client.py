from __future__ import annotations

from typing import Optional

import httpx

from authcenter.settings import Settings

_client: Optional[httpx.AsyncClient] = None


def build_http_client(
    settings: Settings, *, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """One client for both gateways, sized and timed from the delivery settings."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            settings.delivery_timeout_seconds,
            connect=settings.delivery_connect_timeout_seconds,
        ),
        limits=httpx.Limits(
            max_connections=settings.delivery_max_connections,
            max_keepalive_connections=settings.delivery_max_connections,
        ),
        headers={"User-Agent": "authcenter-delivery"},
        transport=transport,
    )


async def open_http_client(
    settings: Settings, *, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = build_http_client(settings, transport=transport)
    return _client


def get_http_client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("delivery HTTP client is not open; the app lifespan opens it")
    return _client


async def close_http_client() -> None:
    global _client
    client, _client = _client, None
    if client is not None:
        await client.aclose()
