# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    detail: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.detail or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.detail:
            payload["detail"] = self.detail
        if self.context:
            payload["context"] = dict(self.context)
        return payload

    def to_text(self) -> str:
        line = f"{self.status.value} {self.status.phrase}"
        if self.detail:
            line = f"{line} - {self.detail}"
        return line


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        detail: str | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(
            code=resolved_code, status=resolved_status, context=context, detail=detail
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        detail: str | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context, detail=detail)


class RouteNotFoundError(AppError):
    def __init__(self, detail: str, **context: Any) -> None:
        super().__init__(
            code="route_not_found",
            status=HTTPStatus.NOT_FOUND,
            context=context or None,
            detail=detail,
        )


class MethodNotAllowedError(AppError):
    def __init__(self, method: str, allowed: tuple[str, ...]) -> None:
        super().__init__(
            code="method_not_allowed",
            status=HTTPStatus.METHOD_NOT_ALLOWED,
            context={"method": method, "allowed": list(allowed)},
            detail=f"Method '{method}' is not allowed",
        )

    @property
    def allowed(self) -> list[str]:
        return list((self.context or {}).get("allowed", []))


class CsrfTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(
            code="csrf",
            status=HTTPStatus.FORBIDDEN,
            detail="Invalid or missing CSRF token",
        )


class MissingResponseError(InfrastructureError):
    def __init__(self, endpoint: str) -> None:
        super().__init__(
            "missing_response",
            context={"endpoint": endpoint},
            detail=f"{endpoint} finished without producing a response",
        )
