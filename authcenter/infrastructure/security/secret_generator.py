from __future__ import annotations

import secrets

from authcenter.domain.ports.secret_generator import SecretGeneratorPort


class TokenSecretGenerator(SecretGeneratorPort):
    def __init__(self, *, nbytes: int = 32) -> None:
        self._nbytes = nbytes

    def generate_secret(self) -> str:
        return secrets.token_urlsafe(self._nbytes)
