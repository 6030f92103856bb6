"""Pydantic schemas for registration and login."""

from pydantic import EmailStr, Field, field_validator

from talentflow.enums import Role
from talentflow.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    full_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Role

    @field_validator("full_name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Full name is required")
        return v


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthPayload(CamelModel):
    """Returned by register and login."""
    token: str
    token_type: str = "Bearer"
    email: str
    role: Role
    full_name: str
    user_id: int


class AccountRead(CamelModel):
    id: int
    email: str
    full_name: str
    role: Role
    is_active: bool
