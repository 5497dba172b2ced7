# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interface import ServerSideSession, ServerSideSessionInterface, new_session_id
from .store import InMemorySessionStore, SessionRecord, SessionStore

__all__ = [
    "InMemorySessionStore",
    "ServerSideSession",
    "ServerSideSessionInterface",
    "SessionRecord",
    "SessionStore",
    "new_session_id",
]
