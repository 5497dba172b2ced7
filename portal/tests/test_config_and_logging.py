from __future__ import annotations

import pydantic
import pytest

from portal.shared.config import AppConfig
from portal.shared.config.settings import SecurityConfig, SessionConfig
from portal.shared.logging.sensitive_filter import sanitize_message


def test_session_backend_is_validated() -> None:
    assert SessionConfig(SESSION_BACKEND=" Database ").backend == "database"

    with pytest.raises(pydantic.ValidationError):
        SessionConfig(SESSION_BACKEND="redis")


def test_security_flags_parse_strings() -> None:
    config = SecurityConfig(ENABLE_CSRF="no", COOKIE_SECURE="yes")

    assert config.enable_csrf is False
    assert config.cookie_secure is True


def test_production_refuses_default_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(APP_ENV="production", SECRET_KEY="dev")


@pytest.mark.parametrize(
    ("message", "leaked"),
    [
        ("login password=hunter22", "hunter22"),
        ("csrf_token=0123456789abcdef0123", "0123456789abcdef0123"),
        ("rotated sid=AbCdEfGhIjKlMnOpQr", "AbCdEfGhIjKlMnOpQr"),
        ("contact alice@portal.io", "alice@"),
        ("postgresql://app:s3cret@db/portal", "s3cret"),
    ],
)
def test_sanitize_message_redacts_secrets(message: str, leaked: str) -> None:
    assert leaked not in sanitize_message(message)
