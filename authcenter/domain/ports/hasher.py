from typing import Protocol


class HasherPort(Protocol):
    def generate_salt(self) -> str:
        """Return a fresh random salt."""

    def hash(self, content: str, salt: str) -> str:
        """
        Deterministic one-way hash of `content` under `salt`.
        Same inputs must always give the same output. Raises HasherError.
        """
