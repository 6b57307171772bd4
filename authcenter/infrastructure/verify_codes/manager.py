from __future__ import annotations

import logging

import authcenter.domain.services as domain_services
from authcenter.domain.errors import DeliveryError, InvalidVerifyCode
from authcenter.domain.ports.email_port import EmailPort
from authcenter.domain.ports.sms_port import SmsPort
from authcenter.domain.ports.verify_code_manager import VerifyCodeManagerPort
from authcenter.domain.ports.verify_code_store import VerifyCodeStorePort

logger = logging.getLogger(__name__)


def sms_key(phone: str) -> str:
    return f"sms:{phone}"


def email_key(email: str) -> str:
    return f"email:{email}"


class VerifyCodeManager(VerifyCodeManagerPort):
    """
    Issues numeric codes per channel. Only a salted digest is stored, with a
    TTL; a new code for the same contact replaces the previous one, and a code
    is consumed by its first successful check.
    """

    def __init__(
        self,
        store: VerifyCodeStorePort,
        *,
        email: EmailPort,
        sms: SmsPort,
        ttl_seconds: int = 300,
        code_length: int = 6,
    ) -> None:
        self._store = store
        self._email = email
        self._sms = sms
        self._ttl_seconds = ttl_seconds
        self._code_length = code_length

    async def _issue(self, key: str) -> str:
        code = domain_services.generate_numeric_code(self._code_length)
        salt_b64, digest_b64 = domain_services.make_code_digest(code)
        await self._store.store_hashed_code(key, salt_b64, digest_b64, self._ttl_seconds)
        return code

    def _message(self, code: str) -> str:
        minutes = max(1, self._ttl_seconds // 60)
        return f"Your verification code is {code}. It expires in {minutes} minute(s)."

    async def send_by_sms(self, phone: str) -> None:
        key = sms_key(phone)
        code = await self._issue(key)
        try:
            await self._sms.send(to=phone, body=self._message(code))
        except DeliveryError:
            # an undelivered code must not stay valid
            await self._store.invalidate(key)
            raise
        logger.info("verification code sent", extra={"channel": "sms"})

    async def send_by_email(self, email: str) -> None:
        key = email_key(email)
        code = await self._issue(key)
        try:
            await self._email.send(
                to=email, subject="Your verification code", body=self._message(code)
            )
        except DeliveryError:
            await self._store.invalidate(key)
            raise
        logger.info("verification code sent", extra={"channel": "email"})

    async def verify_sms_code(self, phone: str, code: str) -> None:
        if not await self._store.verify_and_consume(sms_key(phone), code):
            raise InvalidVerifyCode()

    async def verify_email_code(self, email: str, code: str) -> None:
        if not await self._store.verify_and_consume(email_key(email), code):
            raise InvalidVerifyCode()
