"""Сервис загрузки директории с результатами тестов в TestOps как запуска."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, TextIO

from wot.clients.base import ReportTarget
from wot.exceptions import DirectoryNotFoundError, ProjectNotFoundError, UploadCancelledByUser
from wot.models.testops import LaunchInfo
from wot.utils.archive import zip_directory

logger = logging.getLogger(__name__)

LAUNCH_NAME_TEMPLATE = "Run from {timestamp}"
LAUNCH_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"
CONFIRM_PROMPT = "You want to load a report into a project: '{name}' [y/n]? "
LAUNCH_LINK_TEMPLATE = "Link to uploaded launch: {base_url}/launch/{launch_id}"

_AFFIRMATIVE_ANSWERS = frozenset({"", "y", "yes"})


def build_launch_name(now: datetime) -> str:
    return LAUNCH_NAME_TEMPLATE.format(timestamp=now.strftime(LAUNCH_TIMESTAMP_FORMAT))


def is_confirmed(answer: str) -> bool:
    """Пустая строка, ``y`` и ``yes`` (без учёта регистра) — согласие."""
    return answer.strip().lower() in _AFFIRMATIVE_ANSWERS


class ReportUploadService:
    """Загружает отчёт: проверка проекта → подтверждение → архив → upload → очистка.

    Повторов нет: сбой любого шага прерывает цепочку. Архив удаляется
    после загрузки при любом исходе.
    """

    def __init__(
        self,
        client: ReportTarget,
        *,
        base_url: str,
        archive_dir: Path,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._archive_dir = archive_dir
        self._input = input_stream or sys.stdin
        self._output = output_stream or sys.stdout
        self._clock = clock

    async def validate_project_id(self, project_id: int) -> None:
        """Проверить, что проект есть среди всех проектов TestOps.

        Raises:
            ProjectNotFoundError: ID нет в списке проектов.
        """
        project_ids = await self._client.get_all_project_ids()
        if project_id not in project_ids:
            raise ProjectNotFoundError(project_id)

    async def confirm_upload(self, project_id: int) -> None:
        """Спросить у пользователя подтверждение загрузки в проект.

        Raises:
            UploadCancelledByUser: Пользователь ответил отказом или ввод закрыт.
        """
        project = await self._client.get_project_by_id(project_id)

        self._output.write(CONFIRM_PROMPT.format(name=project.name))
        self._output.flush()

        answer = self._input.readline()
        # EOF без перевода строки — не пустой ввод, а отсутствие ответа
        if not answer or not is_confirmed(answer):
            logger.debug("Ответ пользователя: %r — загрузка отменена", answer)
            raise UploadCancelledByUser()

    async def send_report(self, directory: Path, project_id: int) -> str:
        """Загрузить содержимое директории как новый запуск.

        Returns:
            Строка со ссылкой на созданный запуск.

        Raises:
            DirectoryNotFoundError: Директория отсутствует.
            ArchiveError: Не удалось записать архив.
            ProjectNotFoundError: Проекта нет в TestOps.
            UploadCancelledByUser: Пользователь отказался от загрузки.
            WotError: Ошибки архивации и API.
        """
        if not directory.is_dir():
            raise DirectoryNotFoundError(str(directory))

        await self.validate_project_id(project_id)
        await self.confirm_upload(project_id)

        archive = zip_directory(directory, self._archive_dir)
        try:
            launch_info = LaunchInfo(name=build_launch_name(self._clock()), project_id=project_id)
            response = await self._client.upload_report(archive, launch_info)
        finally:
            self._cleanup(archive)

        logger.info(
            "Отчёт загружен: launch_id=%d, файлов=%s",
            response.launch_id, response.files_count,
        )
        return LAUNCH_LINK_TEMPLATE.format(base_url=self._base_url, launch_id=response.launch_id)

    @staticmethod
    def _cleanup(archive: Path) -> None:
        try:
            archive.unlink(missing_ok=True)
        except OSError as exc:
            logger.debug("Не удалось удалить архив %s: %s", archive, exc)
