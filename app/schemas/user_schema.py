from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, BaseModel, EmailStr, HttpUrl, field_validator, model_validator
from . import ORMModel


class UserBase(ORMModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=100)
    full_name: Optional[str] = Field(None, alias="fullName", max_length=255)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=255)
    avatar_url: Optional[HttpUrl] = Field(None, alias="avatarUrl")

    @field_validator('username')
    def validate_username(cls, v):
        if not v.strip():
            raise ValueError('Username must not be blank')
        return v.strip()


class UserLogin(BaseModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def check_identity(self):
        if not self.email and not self.username:
            raise ValueError("Provide email or username")
        return self


class UserUpdate(ORMModel):
    full_name: Optional[str] = Field(None, alias="fullName", max_length=255)
    avatar_url: Optional[HttpUrl] = Field(None, alias="avatarUrl")


class UserOut(ORMModel):
    id: int
    email: EmailStr
    username: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    is_admin: bool = False
    created_at: datetime
    last_login: Optional[datetime] = None


class RefreshRequest(ORMModel):
    refresh_token: Optional[str] = Field(None, alias="refreshToken")
