from .base import (AppError, CsrfTokenError, DomainError, InfrastructureError,
                   MethodNotAllowedError, MissingResponseError,
                   RouteNotFoundError)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "CsrfTokenError",
    "DomainError",
    "InfrastructureError",
    "MethodNotAllowedError",
    "MissingResponseError",
    "RouteNotFoundError",
    "handle_app_error",
    "register_error_handler",
]
