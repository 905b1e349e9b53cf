# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .authenticators import Authenticator, SessionAuthenticator, TokenAuthenticator
from .sessions import DatabaseSessionInterface, ServerSideSession, SqlAlchemySessionStore
from .tokens import JwtTokenService

__all__ = [
    "Authenticator",
    "DatabaseSessionInterface",
    "JwtTokenService",
    "ServerSideSession",
    "SessionAuthenticator",
    "SqlAlchemySessionStore",
    "TokenAuthenticator",
]
