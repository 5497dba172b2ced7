# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Server-side sessions for Flask.

The cookie only carries an opaque random id; the session contents live in a
``SessionStore``. Records idle for longer than the configured lifetime are
dropped on load and the client gets a fresh, empty session.
"""

from __future__ import annotations

import secrets
import time
from typing import Any

from flask import Flask, Request, Response
from flask import request as current_request
from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

from portal.shared.logging import logger

from .store import SessionRecord, SessionStore

SESSION_ID_BYTES = 32


def new_session_id() -> str:
    return secrets.token_urlsafe(SESSION_ID_BYTES)


class ServerSideSession(CallbackDict, SessionMixin):
    def __init__(
        self,
        initial: dict[str, Any] | None = None,
        sid: str | None = None,
        new: bool = False,
    ) -> None:
        def on_update(session: ServerSideSession) -> None:
            session.modified = True
            session.accessed = True

        super().__init__(initial, on_update)
        self.sid = sid or new_session_id()
        self.new = new
        self.modified = False
        self.accessed = False
        self.previous_sid: str | None = None

    def __getitem__(self, key: str) -> Any:
        self.accessed = True
        return super().__getitem__(key)

    def get(self, key: str, default: Any = None) -> Any:
        self.accessed = True
        return super().get(key, default)

    def setdefault(self, key: str, default: Any = None) -> Any:
        self.accessed = True
        return super().setdefault(key, default)

    def rotate(self) -> None:
        """Move the contents to a new id; the old record is deleted on save."""
        if self.previous_sid is None:
            self.previous_sid = self.sid
        self.sid = new_session_id()
        self.modified = True


class ServerSideSessionInterface(SessionInterface):
    session_class = ServerSideSession

    def __init__(self, store: SessionStore, *, lifetime: int) -> None:
        self._store = store
        self._lifetime = lifetime

    @property
    def store(self) -> SessionStore:
        return self._store

    def open_session(self, app: Flask, request: Request) -> ServerSideSession:
        sid = request.cookies.get(self.get_cookie_name(app))
        if not sid:
            return self.session_class(new=True)

        record = self._store.load(sid)
        if record is None:
            return self.session_class(new=True)
        if record.is_expired(self._lifetime):
            logger.info("sessions: expired session discarded")
            self._store.delete(sid)
            return self.session_class(new=True)

        return self.session_class(record.data, sid=sid)

    def save_session(
        self, app: Flask, session: ServerSideSession, response: Response  # type: ignore[override]
    ) -> None:
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.accessed:
            response.vary.add("Cookie")

        if session.previous_sid is not None:
            self._store.delete(session.previous_sid)

        if not session:
            if session.modified and not session.new:
                self._store.delete(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
                response.vary.add("Cookie")
            return

        if not (session.modified or app.config["SESSION_REFRESH_EACH_REQUEST"]):
            return

        self._store.save(
            SessionRecord(
                sid=session.sid,
                data=dict(session),
                last_activity=int(time.time()),
                ip_address=current_request.remote_addr,
                user_agent=current_request.headers.get("User-Agent"),
            )
        )
        response.set_cookie(
            name,
            session.sid,
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )
        response.vary.add("Cookie")


__all__ = ["ServerSideSession", "ServerSideSessionInterface", "new_session_id"]
