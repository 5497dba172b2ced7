from __future__ import annotations

from portal.interfaces.http.helpers.csrf import TOKEN_KEY, CsrfHelper


def test_get_token_is_idempotent_and_lazy() -> None:
    session: dict[str, object] = {}
    helper = CsrfHelper(session)

    first = helper.get_token()
    second = helper.get_token()

    assert first == second
    assert session[TOKEN_KEY] == first
    assert len(first) == 64
    int(first, 16)


def test_generate_token_invalidates_previous() -> None:
    helper = CsrfHelper({})
    old = helper.get_token()

    new = helper.generate_token()

    assert new != old
    assert helper.verify_token(new) is True
    assert helper.verify_token(old) is False


def test_verify_token_rejects_wrong_values() -> None:
    helper = CsrfHelper({})
    token = helper.get_token()

    assert helper.verify_token(token) is True
    assert helper.verify_token("") is False
    assert helper.verify_token(token[:-1]) is False
    assert helper.verify_token(token.upper()) is False
    assert helper.verify_token("トークン") is False
    assert helper.verify_token(None) is False


def test_verify_token_without_stored_token_is_false() -> None:
    helper = CsrfHelper({})

    assert helper.verify_token("anything") is False


def test_remove_token_clears_session() -> None:
    session: dict[str, object] = {}
    helper = CsrfHelper(session)
    token = helper.get_token()

    helper.remove_token()

    assert TOKEN_KEY not in session
    assert helper.verify_token(token) is False


def test_hidden_input_carries_current_token() -> None:
    helper = CsrfHelper({})

    markup = helper.hidden_input()

    assert markup == f'<input type="hidden" name="csrf_token" value="{helper.get_token()}">'
