"""Генерация шаблона pytest/allure-теста по тест-кейсу TestOps."""

from __future__ import annotations

import logging
from pathlib import Path

from wot.exceptions import CouldNotCreateFileError
from wot.models.testops import CustomFieldInfo, Scenario, TestCaseOverview
from wot.services.scenario_renderer import render_scenario
from wot.utils.naming import to_pascal_case

logger = logging.getLogger(__name__)

PYTHON_SUFFIX = ".py"
STEPS_LABEL = "Steps:"

# Тип кастомного поля (в нижнем регистре) → декоратор allure с одним аргументом
_KNOWN_FIELD_DECORATORS = {
    "epic": "epic",
    "feature": "feature",
    "story": "story",
    "suite": "suite",
}

# Управляющие символы в исходнике ломают литерал (перевод строки) или весь файл (NUL)
_CONTROL_CHARS = [*range(0x20), 0x7F]

_LITERAL_ESCAPES = {code: f"\\x{code:02x}" for code in _CONTROL_CHARS}
_LITERAL_ESCAPES.update({
    ord("\\"): "\\\\",
    ord("'"): "\\'",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
})

# В докстринге переводы строк и табуляция остаются как есть
_DOCSTRING_ESCAPES = {
    code: f"\\x{code:02x}" for code in _CONTROL_CHARS if chr(code) not in "\n\t"
}
_DOCSTRING_ESCAPES[ord("\\")] = "\\\\"


def _quote(value: str) -> str:
    """Строковый литерал в одинарных кавычках."""
    return f"'{value.translate(_LITERAL_ESCAPES)}'"


def _docstring_text(value: str) -> str:
    """Текст, безопасный внутри докстринга в тройных двойных кавычках."""
    return value.translate(_DOCSTRING_ESCAPES).replace('"""', '\\"\\"\\"')


def field_decorator(field: CustomFieldInfo) -> str:
    """Декоратор allure для одного кастомного поля.

    Тип поля — ``field.custom_field.name``, значение — ``field.name``.
    Epic/Feature/Story/Suite дают одноимённые декораторы, остальное —
    ``@allure.label('<тип>', '<значение>')``.
    """
    kind = field.custom_field.name.lower()
    decorator = _KNOWN_FIELD_DECORATORS.get(kind)
    if decorator is not None:
        return f"@allure.{decorator}({_quote(field.name)})"
    return f"@allure.label({_quote(kind)}, {_quote(field.name)})"


def build_decorators(overview: TestCaseOverview) -> list[str]:
    decorators = [field_decorator(field) for field in overview.custom_fields or []]
    if overview.tags:
        tags = ", ".join(_quote(tag.name) for tag in overview.tags)
        decorators.append(f"@allure.tag({tags})")
    return decorators


def build_description(overview: TestCaseOverview) -> str:
    """Описание, предусловие и ожидаемый результат через пустую строку."""
    parts = [overview.description, overview.precondition, overview.expected_result]
    return "\n\n".join(part for part in parts if part)


def derive_test_names(file_name: str) -> tuple[str, str]:
    """Имена класса и функции по имени файла.

    ``test_login.py`` → ``("TestLogin", "test_login")``.
    """
    stem = file_name.removesuffix(PYTHON_SUFFIX)
    return to_pascal_case(stem), stem


def build_test_template(
    overview: TestCaseOverview,
    scenario: Scenario,
    file_name: str,
) -> str:
    """Собрать исходный код теста из метаданных и сценария тест-кейса."""
    decorators = build_decorators(overview)
    description = build_description(overview)
    class_name, function_name = derive_test_names(file_name)

    lines = ["import allure", "import pytest", ""]
    if decorators:
        lines.append("")
        lines.extend(decorators)
    lines.append(f"class {class_name}:")
    lines.append("")
    lines.append(f"    @allure.id({_quote(str(overview.id))})")
    lines.append(f"    @allure.title({_quote(overview.name)})")
    lines.append(f"    def {function_name}(self):")
    lines.append('        """')
    lines.append(f"        {_docstring_text(overview.name)}")
    lines.append("")
    if description:
        lines.append(f"        {_docstring_text(description)}")
        lines.append("")
    lines.append(f"        {STEPS_LABEL}")
    lines.append(f"            {_docstring_text(render_scenario(scenario))}")
    lines.append('        """')
    lines.append("        pass")
    return "\n".join(lines) + "\n"


def save_test_file(file_name: str, content: str, directory: Path | None = None) -> Path:
    """Записать файл в ``directory`` (по умолчанию — текущая директория).

    Returns:
        Абсолютный путь к созданному файлу.

    Raises:
        CouldNotCreateFileError: Любая ошибка записи.
    """
    target = ((directory or Path.cwd()) / file_name).absolute()
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CouldNotCreateFileError(str(target), str(exc)) from exc
    logger.debug("Записан файл %s (%d символов)", target, len(content))
    return target
