"""Импорт тест-кейса из TestOps в локальный файл-шаблон теста."""

from __future__ import annotations

import logging
from pathlib import Path

from wot.clients.base import TestCaseProvider
from wot.exceptions import ApiStatusError, TestCaseNotFoundError
from wot.services.template_generator import PYTHON_SUFFIX, build_test_template, save_test_file

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = frozenset({404})


async def import_test_case(
    client: TestCaseProvider,
    test_case_id: int,
    file_stem: str,
    *,
    directory: Path | None = None,
) -> Path:
    """Получить overview и сценарий тест-кейса и записать шаблон теста.

    Args:
        client: Провайдер тест-кейсов.
        test_case_id: ID тест-кейса в TestOps.
        file_stem: Имя файла без ``.py`` (уже провалидированное).
        directory: Куда писать файл; по умолчанию — текущая директория.

    Returns:
        Абсолютный путь к созданному файлу.

    Raises:
        TestCaseNotFoundError: Сервер ответил 404 на запрос overview.
        WotError: Прочие ошибки API и записи файла.
    """
    try:
        overview = await client.get_test_case_overview(test_case_id)
    except ApiStatusError as exc:
        if exc.status_code in _NOT_FOUND_STATUSES:
            raise TestCaseNotFoundError(test_case_id) from exc
        raise

    scenario = await client.get_test_case_scenario(test_case_id)
    logger.info(
        "Получен тест-кейс %d '%s' (шагов в сценарии: %d)",
        test_case_id, overview.name, len(scenario.root.children),
    )

    file_name = f"{file_stem}{PYTHON_SUFFIX}"
    content = build_test_template(overview, scenario, file_name)
    return save_test_file(file_name, content, directory)
