# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from email_validator import EmailNotValidError, validate_email


class Validator:
    """Chainable field checks that collect messages instead of raising.

    Every rule runs regardless of earlier failures and appends its own
    message, so one field can end up with several errors::

        v = Validator(form).required("email").email("email")
        if not v.is_valid():
            flash(v.get_first_error())

    A field counts as absent when the key is missing or maps to ``None``;
    only ``required`` reports absent fields.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = data if data is not None else {}
        self._errors: dict[str, list[str]] = {}

    def _value(self, field: str) -> Any:
        return self._data.get(field)

    def required(self, field: str, message: str = "") -> Validator:
        message = message or f"{field} is required."
        value = self._value(field)
        if value is None or str(value).strip() == "":
            self._add_error(field, message)
        return self

    def min_length(self, field: str, length: int, message: str = "") -> Validator:
        message = message or f"{field} must be at least {length} characters."
        value = self._value(field)
        if value is not None and len(str(value)) < length:
            self._add_error(field, message)
        return self

    def max_length(self, field: str, length: int, message: str = "") -> Validator:
        message = message or f"{field} must be at most {length} characters."
        value = self._value(field)
        if value is not None and len(str(value)) > length:
            self._add_error(field, message)
        return self

    def email(self, field: str, message: str = "") -> Validator:
        message = message or f"{field} is not a valid email address."
        value = self._value(field)
        if value is None:
            return self
        try:
            validate_email(str(value), check_deliverability=False)
        except EmailNotValidError:
            self._add_error(field, message)
        return self

    def _add_error(self, field: str, message: str) -> None:
        self._errors.setdefault(field, []).append(message)

    def is_valid(self) -> bool:
        return not self._errors

    def get_errors(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self._errors.items()}

    def get_field_errors(self, field: str) -> list[str]:
        return list(self._errors.get(field, []))

    def get_first_error(self) -> str:
        for messages in self._errors.values():
            if messages:
                return messages[0]
        return ""

    def clear_errors(self, data: Mapping[str, Any] | None = None) -> None:
        self._errors = {}
        if data is not None:
            self._data = data


__all__ = ["Validator"]
