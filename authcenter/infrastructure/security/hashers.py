from __future__ import annotations

import hashlib
import secrets
import uuid

from passlib.hash import bcrypt_sha256
from passlib.utils.binary import BCRYPT_CHARS, bcrypt64

from authcenter.domain.errors import HasherError
from authcenter.domain.ports.hasher import HasherPort
from authcenter.settings import get_settings

_BCRYPT_SALT_SIZE = 22


class BcryptHasher(HasherPort):
    """
    passlib bcrypt_sha256 with the salt supplied by the caller, so
    hash(content, salt) is stable for a given salt and cost and the salt can
    live next to the hash in storage and in the secret cache.

    The content is HMAC-SHA256 pre-hashed before bcrypt sees it: NUL bytes
    are accepted and input past 72 bytes still counts.
    """

    def __init__(self, *, rounds: int | None = None) -> None:
        if rounds is None:
            rounds = int(get_settings().bcrypt_rounds)
        self._scheme = bcrypt_sha256.using(rounds=rounds)

    def generate_salt(self) -> str:
        raw = "".join(secrets.choice(BCRYPT_CHARS) for _ in range(_BCRYPT_SALT_SIZE))
        # the last salt char only carries 4 significant bits
        return bcrypt64.repair_unused(raw)

    def hash(self, content: str, salt: str) -> str:
        try:
            return self._scheme.using(salt=salt).hash(content)
        except (TypeError, ValueError) as e:
            raise HasherError(f"bcrypt hashing failed: {e}") from e


class Sha384Hasher(HasherPort):
    """hex(SHA-384(content || salt)) with a UUID4 salt. Fast; for low-cost deployments and tests."""

    def generate_salt(self) -> str:
        return str(uuid.uuid4())

    def hash(self, content: str, salt: str) -> str:
        try:
            h = hashlib.sha384()
            h.update(content.encode("utf-8"))
            h.update(salt.encode("utf-8"))
        except (AttributeError, UnicodeEncodeError) as e:
            raise HasherError(f"sha384 hashing failed: {e}") from e
        return h.hexdigest()


def build_hasher(scheme: str, *, rounds: int | None = None) -> HasherPort:
    if scheme == "bcrypt":
        return BcryptHasher(rounds=rounds)
    if scheme == "sha384":
        return Sha384Hasher()
    raise ValueError(f"unknown hasher: {scheme!r}")
