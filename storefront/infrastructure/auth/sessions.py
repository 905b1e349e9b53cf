# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Server-side admin sessions stored in the ``admin_sessions`` table.

The cookie carries only an opaque id. Ids the store does not know, or whose
row has expired, are never adopted: the request gets a freshly generated id
instead, so a client cannot fixate a session id of its own choosing.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from flask import Flask, Request, Response
from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SessionInterface, SessionMixin
from sqlalchemy import delete, insert, select, update
from werkzeug.datastructures import CallbackDict

from storefront.infrastructure.db import Database
from storefront.infrastructure.db.models import AdminSession
from storefront.shared.logging import logger

SESSION_ID_BYTES = 48  # 64 url-safe characters

_sessions = AdminSession.__table__


def generate_session_id() -> str:
    return secrets.token_urlsafe(SESSION_ID_BYTES)


class ServerSideSession(CallbackDict, SessionMixin):
    def __init__(
        self,
        initial: dict[str, Any] | None = None,
        *,
        sid: str,
        new: bool = False,
    ) -> None:
        def on_update(self: ServerSideSession) -> None:
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.previous_sid: str | None = None

    def regenerate(self) -> None:
        """Move the session data to a brand new id; the old row is dropped on save."""
        if self.previous_sid is None and not self.new:
            self.previous_sid = self.sid
        self.sid = generate_session_id()
        self.modified = True


class SqlAlchemySessionStore:
    def __init__(self, database: Database, *, clock: Callable[[], float] = time.time) -> None:
        self._db = database
        self._clock = clock
        self._serializer = TaggedJSONSerializer()

    def load(self, sid: str) -> dict[str, Any] | None:
        row = self._db.fetch(
            select(_sessions.c.data, _sessions.c.expires_at).where(_sessions.c.id == sid)
        )
        if row is None:
            return None
        if int(row["expires_at"]) <= int(self._clock()):
            self.delete(sid)
            return None
        try:
            data = self._serializer.loads(row["data"])
        except ValueError:
            logger.warning("Discarding unreadable session payload")
            self.delete(sid)
            return None
        return data if isinstance(data, dict) else None

    def save(self, sid: str, data: dict[str, Any], expires_at: int) -> None:
        values = {"data": self._serializer.dumps(data), "expires_at": expires_at}
        updated = self._db.execute(
            update(_sessions).where(_sessions.c.id == sid).values(**values)
        )
        if not updated:
            self._db.execute(insert(_sessions).values(id=sid, **values))

    def delete(self, sid: str) -> None:
        self._db.execute(delete(_sessions).where(_sessions.c.id == sid))

    def purge_expired(self) -> int:
        return self._db.execute(
            delete(_sessions).where(_sessions.c.expires_at <= int(self._clock()))
        )


class DatabaseSessionInterface(SessionInterface):
    def __init__(
        self,
        store: SqlAlchemySessionStore,
        *,
        lifetime: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._lifetime = int(lifetime)
        self._clock = clock

    def open_session(self, app: Flask, request: Request) -> ServerSideSession:
        sid = request.cookies.get(self.get_cookie_name(app))
        if sid:
            data = self._store.load(sid)
            if data is not None:
                return ServerSideSession(data, sid=sid)
        return ServerSideSession(sid=generate_session_id(), new=True)

    def save_session(  # type: ignore[override]
        self, app: Flask, session: ServerSideSession, response: Response
    ) -> None:
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.previous_sid is not None:
            self._store.delete(session.previous_sid)

        if not session:
            if session.modified:
                self._store.delete(session.sid)
                response.delete_cookie(
                    name,
                    domain=domain,
                    path=path,
                    secure=self.get_cookie_secure(app),
                    samesite=self.get_cookie_samesite(app),
                    httponly=self.get_cookie_httponly(app),
                )
            return

        if session.accessed:
            response.vary.add("Cookie")

        if not self.should_set_cookie(app, session):
            return

        now = int(self._clock())
        self._store.save(session.sid, dict(session), now + self._lifetime)
        expires = (
            datetime.fromtimestamp(now + self._lifetime, UTC) if session.permanent else None
        )
        response.set_cookie(
            name,
            session.sid,
            expires=expires,
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )


__all__ = [
    "DatabaseSessionInterface",
    "ServerSideSession",
    "SqlAlchemySessionStore",
    "generate_session_id",
]
