# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "change-me", "")


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    # Database
    database_url: str = Field("sqlite:///storefront.db", alias="DATABASE_URL")
    database_pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    database_pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    # Product API tokens
    jwt_secret: str = Field("change-me", alias="JWT_SECRET")
    jwt_ttl: int = Field(3600, ge=1, alias="JWT_TTL")

    # Admin panel sessions
    session_cookie_name: str = Field("storefront_session", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(False, alias="SESSION_COOKIE_SECURE")
    session_cookie_samesite: str = Field("Lax", alias="SESSION_COOKIE_SAMESITE")
    session_lifetime: int = Field(60 * 60 * 8, ge=60, alias="SESSION_LIFETIME")

    # HTTP
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    # Bootstrap admin
    admin_email: str | None = Field(None, alias="ADMIN_EMAIL")
    admin_password: str | None = Field(None, alias="ADMIN_PASSWORD")
    admin_name: str = Field("Administrator", alias="ADMIN_NAME")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator(
        "debug_logging", "session_cookie_secure", "enable_hsts", mode="before"
    )
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("session_cookie_samesite", mode="after")
    @classmethod
    def _normalize_samesite(cls, value: str) -> str:
        normalized = value.strip().capitalize()
        if normalized not in ("Lax", "Strict", "None"):
            raise ValueError("SESSION_COOKIE_SAMESITE must be Lax, Strict or None")
        return normalized

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        weak = self._weak_secrets()
        if weak:
            print(
                f"\n❌ Refusing to start: {', '.join(weak)} still set to a development value.\n"
                "   Generate a replacement with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        advisories = self._hardening_advisories()
        if advisories:
            print("\n⚠️  Production hardening advisories:", file=sys.stderr)
            print("\n".join(f"   - {line}" for line in advisories), file=sys.stderr)
        return self

    def _weak_secrets(self) -> list[str]:
        configured = {"SECRET_KEY": self.secret_key, "JWT_SECRET": self.jwt_secret}
        return [name for name, value in configured.items() if value in _INSECURE_SECRETS]

    def _hardening_advisories(self) -> list[str]:
        checks = (
            (not self.session_cookie_secure, "Session cookie Secure flag is off; serve over HTTPS"),
            (self.session_cookie_samesite == "None", "SameSite=None sends the session cookie cross-site"),
            ("*" in self.allowed_origins, "CORS accepts any origin (*)"),
            (not self.enable_hsts, "HSTS is DISABLED"),
        )
        return [message for failed, message in checks if failed]

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "load_config"]
