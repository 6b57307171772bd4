from datetime import datetime
from typing import Union

from pydantic import BaseModel, Field

RawId = Union[int, str]


class AppRegisteredOut(BaseModel):
    id: RawId = Field(..., description="The id of the app")
    name: str
    secret: str = Field(..., description="Plaintext app secret, shown only once")


class SecretIssuedOut(BaseModel):
    id: RawId = Field(..., description="The id of the user")
    secret: str = Field(..., description="Plaintext user secret, shown only once")


class AppOut(BaseModel):
    id: RawId
    name: str
    created_at: datetime
    updated_at: datetime


class AppListOut(BaseModel):
    list: list[AppOut]
    total: int
