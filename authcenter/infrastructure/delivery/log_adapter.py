from __future__ import annotations

import logging

from authcenter.domain.ports.email_port import EmailPort
from authcenter.domain.ports.sms_port import SmsPort

logger = logging.getLogger(__name__)


class LogDeliveryAdapter(EmailPort, SmsPort):
    """
    DELIVERY_BACKEND=log: writes every outgoing message to the log instead
    of sending it. Development only, the message body contains the code.
    """

    def __init__(self, channel: str) -> None:
        self.channel = channel

    async def send(
        self,
        *,
        to: str,
        body: str,
        subject: str | None = None,
        idempotency_key: str | None = None,
    ) -> None:
        message = {"channel": self.channel, "to": to, "subject": subject, "body": body}
        logger.info("verification message", extra=message)
