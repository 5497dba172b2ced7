# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from markupsafe import escape


def escape_data(value: Any) -> Any:
    """HTML-escape every string leaf of ``value``.

    Mappings are escaped value-wise, lists and tuples element-wise; any other
    type is returned untouched. Escaped strings come back as ``Markup`` so the
    template layer does not escape them a second time. Values already wrapped
    in ``Markup`` are escaped as well.
    """
    if isinstance(value, str):
        return escape(str(value))
    if isinstance(value, dict):
        return {key: escape_data(item) for key, item in value.items()}
    if isinstance(value, list):
        return [escape_data(item) for item in value]
    if isinstance(value, tuple):
        return tuple(escape_data(item) for item in value)
    return value


__all__ = ["escape_data"]
