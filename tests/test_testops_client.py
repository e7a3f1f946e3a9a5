"""Тесты TestOpsClient: пагинация проектов, загрузка архива, тест-кейсы."""

from __future__ import annotations

import httpx
import pytest

from wot.clients.base import LaunchUploader, ProjectProvider, TestCaseProvider as CaseProvider
from wot.clients.testops_client import TestOpsClient
from wot.exceptions import (
    ApiStatusError,
    FileReadError,
    InvalidFileFormatError,
    InvalidFileNameError,
)
from wot.models.testops import LaunchInfo
from conftest import make_testops_client, make_zip, parse_multipart


def _projects_handler(pages: dict[int, list[int]], total_pages: int, calls: list[int]):
    """Листинг проектов: номер страницы → ID проектов на ней."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/rs/project"
        page = int(request.url.params["page"])
        calls.append(page)
        content = [{"id": pid, "name": f"Project{pid}"} for pid in pages.get(page, [])]
        return httpx.Response(200, json={"totalPages": total_pages, "content": content})

    return handler


def test_client_implements_protocols() -> None:
    client = make_testops_client(lambda request: httpx.Response(200))

    assert isinstance(client, ProjectProvider)
    assert isinstance(client, LaunchUploader)
    assert isinstance(client, CaseProvider)


# ---------------------------------------------------------------------------
# get_all_project_ids
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_all_project_ids_collects_all_pages() -> None:
    """totalPages=3 → ровно 3 запроса, результат — объединение всех страниц."""
    calls: list[int] = []
    handler = _projects_handler({0: [1, 2], 1: [3], 2: [2, 7]}, total_pages=3, calls=calls)

    async with make_testops_client(handler) as client:
        ids = await client.get_all_project_ids()

    assert calls == [0, 1, 2]
    assert ids == {1, 2, 3, 7}


@pytest.mark.asyncio
async def test_get_all_project_ids_single_page() -> None:
    calls: list[int] = []
    handler = _projects_handler({0: [5]}, total_pages=1, calls=calls)

    async with make_testops_client(handler) as client:
        ids = await client.get_all_project_ids()

    assert calls == [0]
    assert ids == {5}


@pytest.mark.asyncio
async def test_get_all_project_ids_zero_total_pages_stops_after_first_request() -> None:
    calls: list[int] = []
    handler = _projects_handler({}, total_pages=0, calls=calls)

    async with make_testops_client(handler) as client:
        ids = await client.get_all_project_ids()

    assert calls == [0]
    assert ids == set()


@pytest.mark.asyncio
async def test_get_all_project_ids_stops_at_max_pages(caplog) -> None:
    """Сервер врёт про totalPages → цикл ограничен max_pages, без исключения."""
    calls: list[int] = []
    pages = {n: [n] for n in range(100)}
    handler = _projects_handler(pages, total_pages=1000, calls=calls)

    async with make_testops_client(handler, max_pages=5) as client:
        ids = await client.get_all_project_ids()

    assert calls == [0, 1, 2, 3, 4]
    assert ids == {0, 1, 2, 3, 4}
    assert "max_pages" in caplog.text


@pytest.mark.asyncio
async def test_get_project_by_id_propagates_status_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="Not Found")

    async with make_testops_client(handler) as client:
        with pytest.raises(ApiStatusError) as exc_info:
            await client.get_project_by_id(9999)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_launch() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/rs/launch/42"
        return httpx.Response(200, json={"id": 42, "name": "Run from 01/01/2026 10:00", "projectId": 2})

    async with make_testops_client(handler) as client:
        launch = await client.get_launch(42)

    assert launch.id == 42
    assert launch.project_id == 2


# ---------------------------------------------------------------------------
# upload_report
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_upload_report_sends_info_and_archive(tmp_path) -> None:
    """LaunchInfo, отправленный в части info, читается сервером без потерь."""
    archive = make_zip(tmp_path / "report.zip")
    launch_info = LaunchInfo(name="Run from 19/10/2026 14:23", project_id=2)
    received: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/rs/launch/upload"
        parts = parse_multipart(request)
        received["info"] = LaunchInfo.model_validate_json(parts["info"][1])
        received["archive_head"] = parts["archive"][0]
        received["archive"] = parts["archive"][1]
        return httpx.Response(200, json={"launchId": 11111, "testSessionId": 7, "filesCount": 1})

    async with make_testops_client(handler) as client:
        response = await client.upload_report(archive, launch_info)

    assert response.launch_id == 11111
    assert received["info"] == launch_info
    assert 'filename="report.zip"' in received["archive_head"]
    assert "application/zip" in received["archive_head"]
    assert received["archive"] == archive.read_bytes()


@pytest.mark.asyncio
async def test_upload_report_info_uses_camel_case(tmp_path) -> None:
    archive = make_zip(tmp_path / "report.zip")
    received: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        received["info"] = parse_multipart(request)["info"][1]
        return httpx.Response(200, json={"launchId": 1, "testSessionId": 1, "filesCount": 1})

    async with make_testops_client(handler) as client:
        await client.upload_report(archive, LaunchInfo(name="n", project_id=3))

    assert b'"projectId":3' in received["info"]


@pytest.mark.asyncio
async def test_upload_report_rejects_non_zip_content(tmp_path) -> None:
    """Расширение .zip не важно — проверяется содержимое."""
    fake = tmp_path / "fake.zip"
    fake.write_text('{"not": "zip"}')
    calls: list[httpx.Request] = []

    async with make_testops_client(lambda r: calls.append(r)) as client:
        with pytest.raises(InvalidFileFormatError):
            await client.upload_report(fake, LaunchInfo(name="n", project_id=1))

    assert calls == []


@pytest.mark.asyncio
async def test_upload_report_directory_path_raises_invalid_file_name(tmp_path) -> None:
    async with make_testops_client(lambda r: httpx.Response(500)) as client:
        with pytest.raises(InvalidFileNameError):
            await client.upload_report(tmp_path, LaunchInfo(name="n", project_id=1))


@pytest.mark.asyncio
async def test_upload_report_missing_file_raises_read_error(tmp_path) -> None:
    async with make_testops_client(lambda r: httpx.Response(500)) as client:
        with pytest.raises(FileReadError):
            await client.upload_report(tmp_path / "missing.zip", LaunchInfo(name="n", project_id=1))


# ---------------------------------------------------------------------------
# Тест-кейсы
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_test_case_overview_and_scenario() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/rs/testcase/5/overview":
            return httpx.Response(200, json={
                "id": 5,
                "projectId": 2,
                "name": "Login",
                "customFields": [{"id": 1, "name": "Auth", "customField": {"name": "Epic"}}],
                "tags": [{"id": 1, "name": "smoke"}],
            })
        if request.url.path == "/api/rs/testcase/5/step":
            return httpx.Response(200, json={
                "root": {"children": [10]},
                "scenarioSteps": {"10": {"id": 10, "body": "Open page"}},
            })
        return httpx.Response(404)

    async with make_testops_client(handler) as client:
        overview = await client.get_test_case_overview(5)
        scenario = await client.get_test_case_scenario(5)

    assert overview.name == "Login"
    assert overview.custom_fields[0].custom_field.name == "Epic"
    assert overview.custom_fields[0].name == "Auth"
    assert scenario.root.children == [10]
    assert scenario.get_step(10).body == "Open page"


def test_create_builds_client_with_base_url() -> None:
    client = TestOpsClient.create("https://testops.test/", "c4e42f15-5b22-46ae-b2a0-10b5e2ffcb14")

    assert client.base_url == "https://testops.test"
