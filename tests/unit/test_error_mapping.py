import pytest
from fastapi import HTTPException

from authcenter.domain.errors import (
    ContactAlreadyRegistered,
    InvalidAppCredential,
    InvalidCredential,
    InvalidVerifyCode,
    MissingContact,
    SecretRotationFailed,
    UnsupportedLoginMethod,
)
from authcenter.domain.identity import identity_parser
from authcenter.presentation.errors import parse_id, to_http_exception


@pytest.mark.parametrize(
    "error,status",
    [
        (MissingContact(), 400),
        (InvalidVerifyCode(), 400),
        (ContactAlreadyRegistered(), 409),
        (SecretRotationFailed(0), 409),
    ],
)
def test_status_codes(error, status):
    assert to_http_exception(error).status_code == status


@pytest.mark.parametrize(
    "error", [InvalidCredential(), InvalidAppCredential(), UnsupportedLoginMethod()]
)
def test_credential_errors_render_identically(error):
    exc = to_http_exception(error)
    assert (exc.status_code, exc.detail) == (401, "invalid credentials")


def test_parse_id_maps_to_422():
    parse = identity_parser("int")
    assert parse_id(parse, "12", "app_id") == 12
    with pytest.raises(HTTPException) as ei:
        parse_id(parse, "abc", "app_id")
    assert ei.value.status_code == 422
    assert ei.value.detail == "invalid app_id"
    assert isinstance(ei.value.__cause__, ValueError)
