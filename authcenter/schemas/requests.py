from typing import Optional, Union

from pydantic import BaseModel, EmailStr, Field

# ids arrive as JSON numbers or strings; the router parses them with the
# deployment's identity type
RawId = Union[int, str]

# passlib refuses secrets over 4096 chars; keep oversized input a 422
MAX_SECRET_LENGTH = 1024


class AppCreateIn(BaseModel):
    name: str = Field(..., description="Display name of the app", min_length=1, max_length=255)


class ContactIn(BaseModel):
    phone: Optional[str] = Field(None, description="Phone number", max_length=32)
    email: Optional[EmailStr] = Field(None, description="E-mail address", max_length=255)


class AppCredentialIn(BaseModel):
    app_id: RawId = Field(..., description="Id of the calling app")
    app_secret: str = Field(
        ..., description="Secret of the calling app", min_length=1, max_length=MAX_SECRET_LENGTH
    )


class UserCreateIn(ContactIn, AppCredentialIn):
    password: str = Field(
        ..., description="The password of the user", min_length=4, max_length=MAX_SECRET_LENGTH
    )
    verify_code: str = Field(..., min_length=4, max_length=10)


class LoginIn(ContactIn, AppCredentialIn):
    password: str = Field(..., min_length=1, max_length=MAX_SECRET_LENGTH)


class VerifySecretIn(AppCredentialIn):
    id: RawId = Field(..., description="Id of the user")
    secret: str = Field(..., min_length=1, max_length=MAX_SECRET_LENGTH)


class SendVerifyCodeIn(ContactIn):
    pass
