# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json

from portal.infrastructure.db.models import StoredSession
from portal.infrastructure.db.session import session_scope
from portal.shared.logging import logger

from .store import SessionRecord, SessionStore


class SqlAlchemySessionStore(SessionStore):
    def load(self, sid: str) -> SessionRecord | None:
        with session_scope() as session:
            row = session.get(StoredSession, sid)
            if row is None:
                return None
            try:
                data = json.loads(row.data or "{}")
            except ValueError:
                logger.warning("sessions: discarding undecodable session payload")
                data = {}
            return SessionRecord(
                sid=row.id,
                data=data if isinstance(data, dict) else {},
                last_activity=row.last_activity,
                ip_address=row.ip_address,
                user_agent=row.user_agent,
            )

    def save(self, record: SessionRecord) -> None:
        payload = json.dumps(record.data, ensure_ascii=False)
        with session_scope() as session:
            row = session.get(StoredSession, record.sid)
            if row is None:
                row = StoredSession(id=record.sid)
                session.add(row)
            row.data = payload
            row.user_id = record.user_id
            row.last_activity = record.last_activity
            row.ip_address = record.ip_address
            row.user_agent = record.user_agent

    def delete(self, sid: str) -> None:
        with session_scope() as session:
            session.query(StoredSession).filter(StoredSession.id == sid).delete()

    def purge_expired(self, lifetime: int, now: int) -> int:
        with session_scope() as session:
            removed = (
                session.query(StoredSession)
                .filter(StoredSession.last_activity < now - lifetime)
                .delete()
            )
        if removed:
            logger.info(f"sessions: purged {removed} expired sessions")
        return removed
