from typing import Protocol


class VerifyCodeManagerPort(Protocol):
    async def send_by_sms(self, phone: str) -> None:
        """Issue a fresh code for `phone` and deliver it by SMS."""

    async def send_by_email(self, email: str) -> None:
        """Issue a fresh code for `email` and deliver it by e-mail."""

    async def verify_sms_code(self, phone: str, code: str) -> None:
        """Raise InvalidVerifyCode unless `code` is the live code for `phone`."""

    async def verify_email_code(self, email: str, code: str) -> None:
        """Raise InvalidVerifyCode unless `code` is the live code for `email`."""
