# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from threading import Lock
from typing import Any, Protocol


@dataclass(slots=True, frozen=True)
class SessionRecord:

    sid: str
    data: dict[str, Any] = field(default_factory=dict)
    last_activity: int = field(default_factory=lambda: int(time.time()))
    ip_address: str | None = None
    user_agent: str | None = None

    @property
    def user_id(self) -> int | None:
        value = self.data.get("user_id")
        return value if isinstance(value, int) else None

    def is_expired(self, lifetime: int, now: float | None = None) -> bool:
        current = time.time() if now is None else now
        return self.last_activity + lifetime < current


class SessionStore(Protocol):
    def load(self, sid: str) -> SessionRecord | None: ...
    def save(self, record: SessionRecord) -> None: ...
    def delete(self, sid: str) -> None: ...
    def purge_expired(self, lifetime: int, now: int) -> int: ...


class InMemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self._records: dict[str, SessionRecord] = {}
        self._lock = Lock()

    def load(self, sid: str) -> SessionRecord | None:
        with self._lock:
            record = self._records.get(sid)
            if record is None:
                return None
            return replace(record, data=dict(record.data))

    def save(self, record: SessionRecord) -> None:
        with self._lock:
            self._records[record.sid] = replace(record, data=dict(record.data))

    def delete(self, sid: str) -> None:
        with self._lock:
            self._records.pop(sid, None)

    def purge_expired(self, lifetime: int, now: int) -> int:
        with self._lock:
            expired = [
                sid for sid, record in self._records.items() if record.is_expired(lifetime, now)
            ]
            for sid in expired:
                del self._records[sid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, sid: object) -> bool:
        with self._lock:
            return sid in self._records


__all__ = ["InMemorySessionStore", "SessionRecord", "SessionStore"]
