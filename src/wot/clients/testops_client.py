"""Клиент REST API Allure TestOps (``/api/rs``)."""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path

from wot.clients.base_client import DEFAULT_TIMEOUT, BaseApiClient, MultipartFiles
from wot.exceptions import FileReadError, InvalidFileFormatError, InvalidFileNameError
from wot.models.common import PageResponse
from wot.models.testops import (
    LaunchInfo,
    LaunchResponse,
    ProjectInfo,
    ResponseLaunchUpload,
    Scenario,
    TestCaseOverview,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 50


def get_file_name(path: Path) -> str:
    """Имя файла с расширением.

    Raises:
        InvalidFileNameError: Путь указывает на директорию или не содержит имени.
    """
    if path.is_dir() or not path.name:
        raise InvalidFileNameError(str(path))
    return path.name


def validate_zip_archive(content: bytes, path: Path) -> None:
    """Проверить, что байты — корректный ZIP (читается центральный каталог).

    Raises:
        InvalidFileFormatError: Архив не парсится.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            archive.infolist()
    except zipfile.BadZipFile as exc:
        raise InvalidFileFormatError(str(path)) from exc


class TestOpsClient:
    """Типизированные операции над REST API Allure TestOps.

    Реализует протоколы :class:`~wot.clients.base.ProjectProvider`,
    :class:`~wot.clients.base.LaunchUploader` и
    :class:`~wot.clients.base.TestCaseProvider`.

    Пути эндпоинтов — атрибуты класса, чтобы их можно было переопределить,
    если целевая версия TestOps использует другую структуру API.
    """

    __test__ = False

    API_PREFIX = "/api/rs"
    PROJECT_ENDPOINT = f"{API_PREFIX}/project"
    LAUNCH_ENDPOINT = f"{API_PREFIX}/launch"
    LAUNCH_UPLOAD_ENDPOINT = f"{API_PREFIX}/launch/upload"
    TESTCASE_ENDPOINT = f"{API_PREFIX}/testcase"

    def __init__(
        self,
        api: BaseApiClient,
        *,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        self._api = api
        self._max_pages = max_pages

    @classmethod
    def create(
        cls,
        base_url: str,
        api_token: str,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        ssl_verify: bool = True,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> TestOpsClient:
        """Собрать клиент вместе с базовым HTTP-клиентом."""
        api = BaseApiClient(base_url, api_token, timeout=timeout, ssl_verify=ssl_verify)
        return cls(api, max_pages=max_pages)

    @property
    def base_url(self) -> str:
        return self._api.base_url

    # --- Проекты (протокол ProjectProvider) ---

    async def get_project_by_id(self, project_id: int) -> ProjectInfo:
        """Получить проект по ID.

        ``GET /api/rs/project/{id}``

        Raises:
            ApiStatusError: Без преобразований — 404 трактует вызывающий код.
        """
        return await self._api.get(f"{self.PROJECT_ENDPOINT}/{project_id}", ProjectInfo)

    async def get_all_project_ids(self) -> set[int]:
        """Получить ID всех проектов, итерируя по страницам.

        ``GET /api/rs/project?page={n}``

        Останавливается, когда сервер сообщает, что страниц больше нет
        (``totalPages <= page + 1``), или после ``max_pages`` запросов —
        защита от бесконечного цикла при некорректных метаданных пагинации.
        """
        project_ids: set[int] = set()

        for page in range(self._max_pages):
            page_resp = await self._api.get(
                f"{self.PROJECT_ENDPOINT}?page={page}",
                PageResponse[ProjectInfo],
            )
            project_ids.update(project.id for project in page_resp.content)

            logger.debug(
                "Получена страница проектов %d/%d (пока собрано %d ID)",
                page + 1,
                page_resp.total_pages,
                len(project_ids),
            )

            if page_resp.total_pages <= page + 1:
                break
        else:
            logger.warning(
                "Достигнут лимит max_pages (%d) при получении проектов. Собрано %d ID.",
                self._max_pages,
                len(project_ids),
            )

        logger.debug("Всего получено %d ID проектов", len(project_ids))
        return project_ids

    # --- Запуски (протокол LaunchUploader) ---

    async def get_launch(self, launch_id: int) -> LaunchResponse:
        """Получить метаданные запуска по ID.

        ``GET /api/rs/launch/{id}``
        """
        return await self._api.get(f"{self.LAUNCH_ENDPOINT}/{launch_id}", LaunchResponse)

    async def upload_report(
        self,
        file_path: Path,
        launch_info: LaunchInfo,
    ) -> ResponseLaunchUpload:
        """Загрузить ZIP-архив с результатами тестов как новый запуск.

        ``POST /api/rs/launch/upload`` — multipart из двух частей:
        ``info`` (JSON :class:`LaunchInfo`) и ``archive`` (байты архива).

        Raises:
            InvalidFileNameError: Из пути не извлекается имя файла.
            FileReadError: Файл не читается.
            InvalidFileFormatError: Файл не является ZIP-архивом.
        """
        file_name = get_file_name(file_path)
        try:
            content = file_path.read_bytes()
        except OSError as exc:
            raise FileReadError(str(file_path), str(exc)) from exc
        validate_zip_archive(content, file_path)

        files: MultipartFiles = [
            ("info", (None, launch_info.to_json().encode("utf-8"), "application/json")),
            ("archive", (file_name, content, "application/zip")),
        ]
        logger.info(
            "Загрузка архива %s (%d байт) в проект %d",
            file_name, len(content), launch_info.project_id,
        )
        return await self._api.post_multipart(
            self.LAUNCH_UPLOAD_ENDPOINT, files, ResponseLaunchUpload,
        )

    # --- Тест-кейсы (протокол TestCaseProvider) ---

    async def get_test_case_overview(self, test_case_id: int) -> TestCaseOverview:
        """``GET /api/rs/testcase/{id}/overview``"""
        return await self._api.get(
            f"{self.TESTCASE_ENDPOINT}/{test_case_id}/overview", TestCaseOverview,
        )

    async def get_test_case_scenario(self, test_case_id: int) -> Scenario:
        """``GET /api/rs/testcase/{id}/step``"""
        return await self._api.get(
            f"{self.TESTCASE_ENDPOINT}/{test_case_id}/step", Scenario,
        )

    # --- Жизненный цикл ---

    async def close(self) -> None:
        await self._api.close()

    async def __aenter__(self) -> TestOpsClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
