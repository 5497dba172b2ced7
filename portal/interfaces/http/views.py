# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import Enum

LAYOUT_TEMPLATE = "layouts/main.html"


class View(str, Enum):
    HOME_INDEX = "home/index"
    LOGIN_INDEX = "login/index"
    MYPAGE_INDEX = "mypage/index"


TEMPLATES: dict[str, str] = {view.value: f"{view.value}.html" for view in View}


def view_name(view: View | str) -> str:
    return view.value if isinstance(view, View) else str(view)


def resolve_template(view: View | str) -> str | None:
    return TEMPLATES.get(view_name(view))


__all__ = ["LAYOUT_TEMPLATE", "TEMPLATES", "View", "resolve_template", "view_name"]
