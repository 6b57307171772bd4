class DomainError(Exception):
    """Base class for all domain-level errors (caller input or credential problems)."""

    pass


class MissingContact(DomainError):
    """Neither a phone number nor an e-mail address was supplied."""

    pass


class InvalidCredential(DomainError):
    """
    Unknown identity, wrong secret or wrong password.
    Deliberately carries no detail about which one.
    """

    pass


class InvalidAppCredential(InvalidCredential):
    """The calling app (tenant) could not be authenticated."""

    pass


class UnsupportedLoginMethod(InvalidCredential):
    """Password login attempted on an account that has no password."""

    pass


class InvalidVerifyCode(DomainError):
    """Verification code is wrong, expired or already used."""

    pass


class ContactAlreadyRegistered(DomainError):
    """The phone or e-mail is already registered under this app."""

    pass


class SecretRotationFailed(DomainError):
    """The secret update did not affect exactly one user row."""

    def __init__(self, affected: int) -> None:
        super().__init__(f"secret rotation affected {affected} rows, expected 1")
        self.affected = affected


class InfrastructureError(Exception):
    """Base class for wrapped lower-layer failures. The cause is chained for logs."""

    pass


class RepositoryError(InfrastructureError):
    """The storage engine failed."""

    pass


class CacherError(InfrastructureError):
    """The secret cache failed."""

    pass


class HasherError(InfrastructureError):
    """Hashing or salt generation failed."""

    pass


class DeliveryError(InfrastructureError):
    """A verification code could not be delivered (SMS / e-mail)."""

    pass
