from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Generic

from authcenter.domain.errors import MissingContact
from authcenter.domain.identity import ID


@dataclass(frozen=True)
class SecretPair:
    hashed_secret: str
    secret_salt: str


@dataclass(frozen=True)
class App(Generic[ID]):
    id: ID
    name: str
    secret_hash: str
    secret_salt: str
    created_at: datetime
    updated_at: datetime

    @property
    def secret_pair(self) -> SecretPair:
        return SecretPair(hashed_secret=self.secret_hash, secret_salt=self.secret_salt)


@dataclass(frozen=True)
class User(Generic[ID]):
    id: ID
    app_id: ID
    secret_hash: str
    secret_salt: str
    created_at: datetime
    updated_at: datetime
    phone: str | None = None
    email: str | None = None
    password_hash: str | None = None
    password_salt: str | None = None

    def __post_init__(self):
        if not self.phone and not self.email:
            raise MissingContact()

    @property
    def secret_pair(self) -> SecretPair:
        return SecretPair(hashed_secret=self.secret_hash, secret_salt=self.secret_salt)

    @property
    def supports_password_login(self) -> bool:
        return self.password_hash is not None and self.password_salt is not None


@dataclass(frozen=True)
class CreateApp:
    name: str
    secret_hash: str
    secret_salt: str


@dataclass(frozen=True)
class CreateUser(Generic[ID]):
    app_id: ID
    secret_hash: str
    secret_salt: str
    phone: str | None = None
    email: str | None = None
    password_hash: str | None = None
    password_salt: str | None = None

    def __post_init__(self):
        if not self.phone and not self.email:
            raise MissingContact()


@dataclass(frozen=True)
class AppQuery(Generic[ID]):
    """Equality / keyword filters, AND-ed. All None matches any app."""

    id_eq: ID | None = None
    name_like_any: tuple[str, ...] | None = None

    def matches(self, app: App[ID]) -> bool:
        if self.id_eq is not None and app.id != self.id_eq:
            return False
        if self.name_like_any:
            name = app.name.lower()
            if not any(keyword.lower() in name for keyword in self.name_like_any):
                return False
        return True


@dataclass(frozen=True)
class UserQuery(Generic[ID]):
    """Equality filters, AND-ed. All None matches any user."""

    id_eq: ID | None = None
    phone_eq: str | None = None
    email_eq: str | None = None
    app_id_eq: ID | None = None

    def matches(self, user: User[ID]) -> bool:
        if self.id_eq is not None and user.id != self.id_eq:
            return False
        if self.phone_eq is not None and user.phone != self.phone_eq:
            return False
        if self.email_eq is not None and user.email != self.email_eq:
            return False
        if self.app_id_eq is not None and user.app_id != self.app_id_eq:
            return False
        return True


@dataclass(frozen=True)
class UserUpdate:
    """None fields are left unchanged (COALESCE semantics)."""

    secret_hash: str | None = None
    secret_salt: str | None = None

    def apply(self, user: User[ID], when: datetime) -> User[ID]:
        return replace(
            user,
            secret_hash=(
                self.secret_hash if self.secret_hash is not None else user.secret_hash
            ),
            secret_salt=(
                self.secret_salt if self.secret_salt is not None else user.secret_salt
            ),
            updated_at=when,
        )


@dataclass(frozen=True)
class RegisteredApp(Generic[ID]):
    id: ID
    name: str
    secret: str


@dataclass(frozen=True)
class IssuedSecret(Generic[ID]):
    id: ID
    secret: str
