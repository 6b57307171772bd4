# authcenter/domain/services.py
from __future__ import annotations

import base64
import hashlib
import hmac
import os
import secrets

from authcenter.domain.errors import MissingContact


def generate_numeric_code(length: int = 6) -> str:
    """Zero-padded numeric code of `length` digits."""
    return f"{secrets.randbelow(10**length):0{length}d}"


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for secrets.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        # hmac.compare_digest supports str if types match
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def _sha256_salt_plus_code(salt: bytes, code: str) -> bytes:
    h = hashlib.sha256()
    h.update(salt)
    h.update(code.encode("utf-8"))
    return h.digest()


def make_code_digest(code: str) -> tuple[str, str]:
    """
    Return (salt_b64, digest_b64) where digest = SHA256(salt || code).
    """
    salt = os.urandom(16)
    digest = _sha256_salt_plus_code(salt, code)
    return (
        base64.b64encode(salt).decode("utf-8"),
        base64.b64encode(digest).decode("utf-8"),
    )


def code_digest_b64(code: str, salt_b64: str) -> str:
    """Digest of `code` under an existing base64 salt (same scheme as make_code_digest)."""
    salt = base64.b64decode(salt_b64.encode("utf-8"), validate=True)
    return base64.b64encode(_sha256_salt_plus_code(salt, code)).decode("utf-8")


def verify_code_digest(code: str, salt_b64: str, digest_b64: str) -> bool:
    """
    Verify code against (salt_b64, digest_b64) from make_code_digest().
    """
    try:
        salt = base64.b64decode(salt_b64.encode("utf-8"), validate=True)
        expected = base64.b64decode(digest_b64.encode("utf-8"), validate=True)
    except ValueError:
        return False

    calc = _sha256_salt_plus_code(salt, code)
    return hmac.compare_digest(calc, expected)


def normalize_contact(
    phone: str | None, email: str | None
) -> tuple[str | None, str | None]:
    """
    Strip the phone, strip + lower-case the e-mail; blanks become None.
    Raises MissingContact when nothing is left.
    """
    normalized_phone = phone.strip() if phone else None
    normalized_email = email.strip().lower() if email else None
    normalized_phone = normalized_phone or None
    normalized_email = normalized_email or None
    if normalized_phone is None and normalized_email is None:
        raise MissingContact()
    return normalized_phone, normalized_email
