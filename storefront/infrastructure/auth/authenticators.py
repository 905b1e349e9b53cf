# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Protocol

import jwt
from flask import Request, session

from storefront.domain.entities import Admin, AuthIdentity, AuthScheme
from storefront.shared.errors import UnauthorizedError
from storefront.shared.logging import logger

from .sessions import ServerSideSession
from .tokens import JwtTokenService

_BEARER_RE = re.compile(r"^Bearer\s+(\S+)\s*$", re.IGNORECASE)

SESSION_ADMIN_KEY = "admin_id"
SESSION_EMAIL_KEY = "admin_email"


class Authenticator(Protocol):
    scheme: AuthScheme

    def authenticate(self, request: Request) -> AuthIdentity: ...


class TokenAuthenticator:
    scheme = AuthScheme.TOKEN

    def __init__(self, tokens: JwtTokenService) -> None:
        self._tokens = tokens

    def authenticate(self, request: Request) -> AuthIdentity:
        match = _BEARER_RE.match(request.headers.get("Authorization", ""))
        if match is None:
            raise UnauthorizedError("Missing or invalid Authorization header")

        try:
            claims = self._tokens.verify(match.group(1))
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            logger.debug(f"Rejected bearer token: {type(exc).__name__}")
            raise UnauthorizedError("Invalid token") from exc

        uid = claims.get("uid")
        if isinstance(uid, bool) or not isinstance(uid, int | str) or not str(uid).isdigit():
            raise UnauthorizedError("Invalid token payload")

        email = claims.get("email")
        return AuthIdentity(
            subject_id=int(uid),
            scheme=self.scheme,
            email=email if isinstance(email, str) else None,
        )


class SessionAuthenticator:
    """Admin panel access backed by the server-side session.

    Session validity beyond "carries an admin id" is left to the store's expiry.
    """

    scheme = AuthScheme.SESSION

    def authenticate(self, request: Request) -> AuthIdentity:
        admin_id = session.get(SESSION_ADMIN_KEY)
        if not isinstance(admin_id, int) or isinstance(admin_id, bool):
            raise UnauthorizedError("Unauthorized")
        return AuthIdentity(
            subject_id=admin_id,
            scheme=self.scheme,
            email=session.get(SESSION_EMAIL_KEY),
        )

    def establish(self, admin: Admin) -> None:
        if isinstance(session, ServerSideSession):
            session.regenerate()
        session.clear()
        session[SESSION_ADMIN_KEY] = admin.id
        session[SESSION_EMAIL_KEY] = admin.email
        session.permanent = True

    def destroy(self) -> None:
        session.clear()


__all__ = [
    "Authenticator",
    "SessionAuthenticator",
    "TokenAuthenticator",
]
