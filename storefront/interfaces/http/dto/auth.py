from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .common import required_text


class LoginRequestDTO(BaseModel):
    email: str
    password: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        return required_text("email", value)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value: Any) -> str:
        # Passwords are compared verbatim, whitespace included.
        if value is None or value == "":
            return required_text("password", None)
        return str(value)


class TokenDTO(BaseModel):
    token: str
    expires_in: int


class AdminSummaryDTO(BaseModel):
    id: int
    name: str
    email: str


class AdminLoginDTO(BaseModel):
    message: str = "Login successful"
    admin: AdminSummaryDTO


class LoginHintDTO(BaseModel):
    message: str = "Send POST /admin/login with email & password"
