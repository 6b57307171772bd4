from __future__ import annotations

from typing import Optional

import httpx

from authcenter.domain.ports.sms_port import SmsPort
from authcenter.infrastructure.http.json_post import JsonPostAdapter


class HttpSmsAdapter(JsonPostAdapter, SmsPort):
    """Posts {to, body} to an HTTP SMS gateway (default path /sms)."""

    label = "SMS gateway"

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/sms",
    ) -> None:
        super().__init__(base_url, client=client, timeout=timeout, send_path=send_path)

    async def send(
        self,
        *,
        to: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> None:
        await self._post({"to": to, "body": body}, idempotency_key)
