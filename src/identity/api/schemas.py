"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Request Schemas ---


class RegisterRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"name": "Asha Patel", "email": "asha@example.com", "password": "harvest-2024"}]
        },
    )

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., max_length=128)


class LoginRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"email": "admin@example.com", "password": "s3cret-pass"}]},
    )

    email: str
    password: str


# --- Response Schemas ---


class UserResponse(CamelModel):
    """A user without credentials."""

    id: str
    user_id: str
    name: str
    email: str
    role: str
    registered_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            registered_at=user.registered_at,
        )


class RegisterResponse(CamelModel):
    message: str
    user_id: str


class SessionResponse(CamelModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
