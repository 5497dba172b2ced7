from __future__ import annotations

import pytest

from portal.interfaces.http.helpers.validator import Validator


@pytest.mark.parametrize("data", [{}, {"name": "   "}, {"name": ""}, {"name": None}])
def test_required_fails_for_missing_or_blank(data: dict) -> None:
    validator = Validator(data).required("name")

    assert not validator.is_valid()
    assert validator.get_field_errors("name") == ["name is required."]


def test_required_passes_for_value() -> None:
    assert Validator({"name": "a"}).required("name").is_valid()


def test_min_length_counts_characters() -> None:
    assert not Validator({"name": "ab"}).min_length("name", 3).is_valid()
    assert Validator({"name": "abc"}).min_length("name", 3).is_valid()
    assert Validator({"name": "山田太"}).min_length("name", 3).is_valid()


def test_length_rules_skip_absent_fields() -> None:
    validator = Validator({}).min_length("name", 3).max_length("name", 1).email("name")

    assert validator.is_valid()


def test_max_length_counts_characters() -> None:
    assert Validator({"name": "日本語"}).max_length("name", 3).is_valid()
    validator = Validator({"name": "日本語です"}).max_length("name", 3, "too long")
    assert validator.get_errors() == {"name": ["too long"]}


def test_email_rule() -> None:
    assert Validator({"e": "alice@portal.io"}).email("e").is_valid()
    assert not Validator({"e": "alice@"}).email("e").is_valid()


def test_chained_rules_all_fire() -> None:
    validator = Validator({"e": "not-an-email", "name": ""})
    validator.required("e").email("e").min_length("e", 20).required("name")

    assert validator.get_field_errors("e") == [
        "e is not a valid email address.",
        "e must be at least 20 characters.",
    ]
    assert list(validator.get_errors()) == ["e", "name"]


def test_required_and_email_on_blank_value_give_two_errors() -> None:
    validator = Validator({"e": " "}).required("e").email("e")

    assert len(validator.get_field_errors("e")) == 2


def test_first_error_follows_insertion_order() -> None:
    validator = Validator({}).required("b", "b missing").required("a", "a missing")

    assert validator.get_first_error() == "b missing"
    assert Validator({}).get_first_error() == ""
    assert validator.get_field_errors("zzz") == []


def test_clear_errors_resets_state_and_accepts_new_input() -> None:
    validator = Validator({}).required("name")
    assert not validator.is_valid()

    validator.clear_errors()
    assert validator.is_valid()

    validator.clear_errors({"name": "bob"})
    assert validator.required("name").is_valid()


def test_get_errors_returns_a_copy() -> None:
    validator = Validator({}).required("name")

    validator.get_errors()["name"].append("tampered")

    assert validator.get_field_errors("name") == ["name is required."]
