from typing import Protocol


class SecretGeneratorPort(Protocol):
    def generate_secret(self) -> str:
        """Return an unpredictable opaque secret string."""
