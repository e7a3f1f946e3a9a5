"""Тесты валидации имени тестового файла и PascalCase."""

from __future__ import annotations

import pytest

from wot.exceptions import InvalidTestFileNameError
from wot.utils.naming import default_test_file_name, to_pascal_case, validate_test_file_name


@pytest.mark.parametrize("value", ["test_a", "test_login_page", "test_" + "a" * 115])
def test_valid_names(value: str) -> None:
    assert validate_test_file_name(value) == value


@pytest.mark.parametrize("value", ["", "test_", "check_login", "test_" + "a" * 116])
def test_length_or_prefix_violation(value: str) -> None:
    with pytest.raises(InvalidTestFileNameError, match="начинаться с 'test_'"):
        validate_test_file_name(value)


@pytest.mark.parametrize("value", ["test_A", "test_log-in", "test_логин", "test_a.py"])
def test_invalid_characters(value: str) -> None:
    with pytest.raises(InvalidTestFileNameError, match="недопустимые символы"):
        validate_test_file_name(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("test_some_one", "TestSomeOne"),
        ("test_one.py", "TestOne.py"),
        ("test__double", "TestDouble"),
        ("", ""),
    ],
)
def test_to_pascal_case(value: str, expected: str) -> None:
    assert to_pascal_case(value) == expected


def test_default_test_file_name_is_valid() -> None:
    name = default_test_file_name(1234)

    assert name == "test_case_1234"
    assert validate_test_file_name(name) == name
