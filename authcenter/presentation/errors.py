from typing import Any, Callable

from fastapi import HTTPException, status

from authcenter.domain.errors import (
    ContactAlreadyRegistered,
    DomainError,
    InvalidCredential,
    InvalidVerifyCode,
    MissingContact,
    SecretRotationFailed,
)
from authcenter.domain.identity import ID

# most specific first; every InvalidCredential subtype renders the same
_STATUS_AND_DETAIL: tuple[tuple[type[DomainError], int, str], ...] = (
    (MissingContact, status.HTTP_400_BAD_REQUEST, "phone or email is required"),
    (InvalidCredential, status.HTTP_401_UNAUTHORIZED, "invalid credentials"),
    (InvalidVerifyCode, status.HTTP_400_BAD_REQUEST, "invalid verification code"),
    (ContactAlreadyRegistered, status.HTTP_409_CONFLICT, "contact already registered"),
    (SecretRotationFailed, status.HTTP_409_CONFLICT, "secret rotation conflict, retry"),
)


def to_http_exception(error: DomainError) -> HTTPException:
    for error_type, status_code, detail in _STATUS_AND_DETAIL:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="bad request")


def parse_id(parse: Callable[[Any], ID], raw: Any, field: str) -> ID:
    try:
        return parse(raw)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail=f"invalid {field}",
        ) from e
