"""
Wire-level DTOs for the member endpoints.

Field names are snake_case in Python and camelCase in JSON (``nickName``,
``authCode``, ``newPassword``); both spellings are accepted on input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MemberPost(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    nick_name: str = Field(..., min_length=1, max_length=64)
    profile: Optional[str] = None
    auth_code: str = Field(..., min_length=1, max_length=16)


class MemberPatch(CamelModel):
    nick_name: Optional[str] = Field(None, min_length=1, max_length=64)
    profile: Optional[str] = None


class MemberPatchPassword(CamelModel):
    password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class MemberPatchProfile(CamelModel):
    profile: Optional[str] = None


class NickNameCheck(CamelModel):
    nick_name: str


class EmailCheck(CamelModel):
    email: str


class Check(CamelModel):
    result: bool


class MemberResponse(CamelModel):
    member_id: int
    email: str
    nick_name: str
    profile: Optional[str] = None


class MemberMyPageResponse(MemberResponse):
    stamp_count: int = 0
    created_at: Optional[datetime] = None


class SingleResponse(CamelModel, Generic[T]):
    """Envelope used by every successful JSON payload."""

    data: T


class AuthCodeRequest(CamelModel):
    email: EmailStr


class AuthCodeVerify(CamelModel):
    email: EmailStr
    auth_code: str = Field(..., min_length=1, max_length=16)


class AuthCodeSent(CamelModel):
    sent: bool


class LoginRequest(CamelModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    member_id: int
    access_token: str
