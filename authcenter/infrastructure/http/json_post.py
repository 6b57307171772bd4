from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from authcenter.domain.errors import DeliveryError


class JsonPostAdapter:
    """
    Base for delivery adapters that POST one JSON document per message.
    Uses the shared client when given one; otherwise owns a private client
    and closes it in aclose().
    """

    label = "delivery"

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/send",
    ) -> None:
        path = send_path if send_path.startswith("/") else f"/{send_path}"
        self.url = f"{base_url.rstrip('/')}{path}"
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def _post(
        self, payload: Dict[str, Any], idempotency_key: str | None = None
    ) -> None:
        headers: Dict[str, str] = {}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key
        try:
            resp = await self._client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise DeliveryError(f"{self.label} HTTP error: {e}") from e
        if not (200 <= resp.status_code < 300):
            raise DeliveryError(
                f"{self.label} responded {resp.status_code}: {resp.text[:200]}"
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
