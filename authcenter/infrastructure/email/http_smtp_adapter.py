from __future__ import annotations

from authcenter.domain.ports.email_port import EmailPort
from authcenter.infrastructure.http.json_post import JsonPostAdapter


class HttpSmtpEmailAdapter(JsonPostAdapter, EmailPort):
    """Posts {to, subject, body} to an HTTP mail relay (default path /send)."""

    label = "SMTP"

    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> None:
        await self._post({"to": to, "subject": subject, "body": body}, idempotency_key)
