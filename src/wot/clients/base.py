"""Протоколы доступа к Allure TestOps, на которые опираются сервисы."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from wot.models.testops import (
    LaunchInfo,
    ProjectInfo,
    ResponseLaunchUpload,
    Scenario,
    TestCaseOverview,
)


@runtime_checkable
class ProjectProvider(Protocol):
    """Чтение проектов TestOps.

    Реализации:
    - TestOpsClient: ``GET /api/rs/project``, ``GET /api/rs/project/{id}``
    """

    async def get_project_by_id(self, project_id: int) -> ProjectInfo:
        """Получить проект по ID."""
        ...

    async def get_all_project_ids(self) -> set[int]:
        """Получить ID всех проектов, обходя страницы листинга."""
        ...


@runtime_checkable
class LaunchUploader(Protocol):
    """Загрузка архива с результатами тестов как нового запуска."""

    async def upload_report(
        self,
        file_path: Path,
        launch_info: LaunchInfo,
    ) -> ResponseLaunchUpload:
        """Загрузить ZIP-архив в TestOps.

        Args:
            file_path: Путь к ZIP-архиву.
            launch_info: Имя запуска и ID проекта.
        """
        ...


@runtime_checkable
class ReportTarget(ProjectProvider, LaunchUploader, Protocol):
    """Всё, что нужно сервису загрузки отчёта."""


@runtime_checkable
class TestCaseProvider(Protocol):
    """Чтение тест-кейсов TestOps для генерации шаблонов."""

    async def get_test_case_overview(self, test_case_id: int) -> TestCaseOverview:
        ...

    async def get_test_case_scenario(self, test_case_id: int) -> Scenario:
        ...
