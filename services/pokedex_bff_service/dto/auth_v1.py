"""Login request/response DTOs."""

from __future__ import annotations

from pydantic import BaseModel


class LoginRequestV1(BaseModel):
    """Login form. Missing fields are treated as wrong credentials, not as 400."""

    username: str = ""
    password: str = ""


class LoginUserV1(BaseModel):
    username: str


class LoginResponseV1(BaseModel):
    token: str
    user: LoginUserV1
