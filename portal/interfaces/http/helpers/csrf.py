# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session-scoped CSRF tokens.

A session carries exactly one token under ``csrf_token``. Generating a new
token overwrites the previous one, so only the latest token verifies.
"""

from __future__ import annotations

import secrets
from collections.abc import MutableMapping
from typing import Any

from markupsafe import Markup

TOKEN_KEY = "csrf_token"
FORM_FIELD = "csrf_token"
TOKEN_BYTES = 32


class CsrfHelper:
    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session

    def generate_token(self) -> str:
        token = secrets.token_hex(TOKEN_BYTES)
        self._session[TOKEN_KEY] = token
        return token

    def get_token(self) -> str:
        token = self._session.get(TOKEN_KEY)
        if isinstance(token, str) and token:
            return token
        return self.generate_token()

    def verify_token(self, candidate: object) -> bool:
        stored = self._session.get(TOKEN_KEY)
        if not isinstance(stored, str) or not stored:
            return False
        if not isinstance(candidate, str):
            return False
        # compare_digest refuses non-ASCII str, bytes keep it constant time
        return secrets.compare_digest(stored.encode("utf-8"), candidate.encode("utf-8"))

    def remove_token(self) -> None:
        self._session.pop(TOKEN_KEY, None)

    def hidden_input(self) -> Markup:
        return Markup('<input type="hidden" name="{}" value="{}">').format(
            FORM_FIELD, self.get_token()
        )


__all__ = ["CsrfHelper", "FORM_FIELD", "TOKEN_KEY"]
