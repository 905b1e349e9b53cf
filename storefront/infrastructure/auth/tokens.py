# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import jwt

from storefront.domain.entities import Admin

_JWT_ALG = "HS256"


class JwtTokenService:
    """Issue and verify HS256 bearer tokens.

    Tokens are stateless; nothing is persisted and a token cannot be revoked
    before ``exp``. Expiry is checked against ``clock`` rather than inside
    PyJWT so the boundary is exact: a token issued with TTL ``T`` is valid
    strictly before ``iat + T``.
    """

    def __init__(
        self,
        secret: str,
        ttl: int = 3600,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._ttl = max(1, int(ttl))
        self._clock = clock

    @property
    def ttl(self) -> int:
        return self._ttl

    def issue(self, admin: Admin) -> tuple[str, int]:
        now = int(self._clock())
        payload: dict[str, Any] = {
            "iat": now,
            "nbf": now,
            "exp": now + self._ttl,
            "uid": admin.id,
            "email": admin.email,
        }
        return jwt.encode(payload, self._secret, algorithm=_JWT_ALG), self._ttl

    def verify(self, token: str) -> dict[str, Any]:
        """Return the claims or raise a ``jwt.InvalidTokenError`` subclass."""
        claims = jwt.decode(
            token,
            self._secret,
            algorithms=[_JWT_ALG],
            options={
                "verify_exp": False,
                "verify_nbf": False,
                "verify_iat": False,
                "require": ["exp", "iat", "nbf"],
            },
        )
        now = int(self._clock())
        try:
            expires_at = int(claims["exp"])
            not_before = int(claims["nbf"])
        except (TypeError, ValueError) as exc:
            raise jwt.InvalidTokenError("Malformed time claim") from exc
        if now >= expires_at:
            raise jwt.ExpiredSignatureError("Signature has expired")
        if now < not_before:
            raise jwt.ImmatureSignatureError("The token is not yet valid (nbf)")
        return claims
