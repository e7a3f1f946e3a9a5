"""Pydantic-модели запросов и ответов Allure TestOps API (``/api/rs``)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProjectInfo(BaseModel):
    """Проект TestOps: ``GET /api/rs/project/{id}``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str


class LaunchInfo(BaseModel):
    """Метаданные загружаемого запуска — часть ``info`` multipart-запроса."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    project_id: int = Field(alias="projectId")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class ResponseLaunchUpload(BaseModel):
    """Ответ ``POST /api/rs/launch/upload``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    launch_id: int = Field(alias="launchId")
    test_session_id: int | None = Field(None, alias="testSessionId")
    files_count: int | None = Field(None, alias="filesCount")


class LaunchResponse(BaseModel):
    """Метаданные запуска: ``GET /api/rs/launch/{id}``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str | None = None
    project_id: int | None = Field(None, alias="projectId")
    closed: bool = False


class CustomField(BaseModel):
    """Описание кастомного поля. ``name`` — это *тип* поля (Epic, Feature, ...)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str


class CustomFieldInfo(BaseModel):
    """Значение кастомного поля тест-кейса.

    Внимание, контракт API: внешнее ``name`` — это **значение** поля,
    а тип поля лежит во вложенном ``custom_field.name``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int | None = None
    name: str
    custom_field: CustomField = Field(alias="customField")


class Tag(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int | None = None
    name: str


class TestCaseOverview(BaseModel):
    """Метаданные тест-кейса: ``GET /api/rs/testcase/{id}/overview``."""

    __test__ = False

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    project_id: int | None = Field(None, alias="projectId")
    name: str
    description: str | None = None
    precondition: str | None = None
    expected_result: str | None = Field(None, alias="expectedResult")
    custom_fields: list[CustomFieldInfo] | None = Field(None, alias="customFields")
    tags: list[Tag] | None = None


class ScenarioStep(BaseModel):
    """Узел дерева сценария.

    ``expected_result_id`` указывает на узел с телом ``"Expected Result"``,
    чьи ``children`` — проверки шага.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    body: str = ""
    expected_result_id: int | None = Field(None, alias="expectedResultId")
    children: list[int] | None = None


class ScenarioRoot(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    children: list[int] = []


class Scenario(BaseModel):
    """Сценарий тест-кейса: ``GET /api/rs/testcase/{id}/step``.

    Плоская карта узлов по строковому ID плюс упорядоченный список
    ID шагов верхнего уровня в ``root.children``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    root: ScenarioRoot = ScenarioRoot()
    scenario_steps: dict[str, ScenarioStep] = Field(default_factory=dict, alias="scenarioSteps")

    def get_step(self, step_id: int) -> ScenarioStep | None:
        """Узел по ID или None, если сервер его не прислал."""
        return self.scenario_steps.get(str(step_id))
