from typing import Optional

import authcenter.domain.services as domain_services
from authcenter.domain.ports.verify_code_manager import VerifyCodeManagerPort


async def send_verify_code(
    verify_codes: VerifyCodeManagerPort,
    *,
    phone: Optional[str],
    email: Optional[str],
) -> None:
    phone, email = domain_services.normalize_contact(phone, email)
    if phone is not None:
        await verify_codes.send_by_sms(phone)
    if email is not None:
        await verify_codes.send_by_email(email)
