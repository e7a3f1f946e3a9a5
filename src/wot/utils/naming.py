"""Имена генерируемых тестовых файлов."""

from __future__ import annotations

import re

from wot.exceptions import InvalidTestFileNameError

TEST_FILE_PREFIX = "test_"
MIN_FILE_NAME_LENGTH = 6
MAX_FILE_NAME_LENGTH = 120

_ALLOWED_CHARS_RE = re.compile(r"^[a-z0-9_]+$")


def to_pascal_case(value: str) -> str:
    """``test_some_one`` → ``TestSomeOne``.

    Меняется только первая буква каждого слова, остальные символы
    (включая точку в ``test_one.py``) сохраняются.
    """
    return "".join(word[:1].upper() + word[1:] for word in value.split("_"))


def validate_test_file_name(value: str) -> str:
    """Проверить имя тестового файла (без расширения ``.py``).

    Длина от 6 до 120 символов, префикс ``test_``, только строчные
    латинские буквы, цифры и ``_``.

    Raises:
        InvalidTestFileNameError: Нарушена длина/префикс или недопустимые символы.
    """
    if not (
        MIN_FILE_NAME_LENGTH <= len(value) <= MAX_FILE_NAME_LENGTH
        and value.startswith(TEST_FILE_PREFIX)
    ):
        raise InvalidTestFileNameError(
            f"Имя файла должно быть длиной {MIN_FILE_NAME_LENGTH}-{MAX_FILE_NAME_LENGTH} "
            f"символов и начинаться с '{TEST_FILE_PREFIX}': '{value}'"
        )
    if not _ALLOWED_CHARS_RE.match(value):
        raise InvalidTestFileNameError(
            f"Имя файла содержит недопустимые символы (разрешены a-z, 0-9, _): '{value}'"
        )
    return value


def default_test_file_name(test_case_id: int) -> str:
    return f"test_case_{test_case_id}"
