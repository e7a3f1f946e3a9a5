"""Общие фабрики и фикстуры для тестов wot."""

from __future__ import annotations

import logging
import re
import zipfile
from pathlib import Path
from typing import Callable

import httpx
import pytest

from wot.clients.base_client import BaseApiClient
from wot.clients.testops_client import TestOpsClient
from wot.models.testops import (
    CustomFieldInfo,
    Scenario,
    TestCaseOverview as Overview,
)

BASE_URL = "https://testops.test"
API_TOKEN = "c4e42f15-5b22-46ae-b2a0-10b5e2ffcb14"


def make_api(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    base_url: str = BASE_URL,
    api_key: str = API_TOKEN,
) -> BaseApiClient:
    """BaseApiClient поверх httpx.MockTransport."""
    return BaseApiClient(base_url, api_key, transport=httpx.MockTransport(handler))


def make_testops_client(
    handler: Callable[[httpx.Request], httpx.Response],
    **kwargs,
) -> TestOpsClient:
    return TestOpsClient(make_api(handler), **kwargs)


def make_custom_field(kind: str, value: str) -> CustomFieldInfo:
    """Кастомное поле: ``kind`` → customField.name, ``value`` → name."""
    return CustomFieldInfo.model_validate(
        {"id": 1, "name": value, "customField": {"name": kind}}
    )


def make_overview(**overrides) -> Overview:
    """Фабрика TestCaseOverview с разумными дефолтами."""
    defaults: dict = {
        "id": 1234,
        "projectId": 222,
        "name": "Some name case",
    }
    defaults.update(overrides)
    return Overview.model_validate(defaults)


def make_scenario(children: list[int], steps: list[dict]) -> Scenario:
    """Сценарий из списка узлов в wire-формате (camelCase)."""
    return Scenario.model_validate(
        {
            "root": {"children": children},
            "scenarioSteps": {str(step["id"]): step for step in steps},
        }
    )


def make_basic_scenario() -> Scenario:
    """Шаг 1 с узлом "Expected Result" (id 2) и одной проверкой (id 3)."""
    return make_scenario(
        [1],
        [
            {"id": 1, "body": "Step 1", "expectedResultId": 2},
            {"id": 2, "body": "Expected Result", "children": [3]},
            {"id": 3, "body": "Substep 1"},
        ],
    )


def make_zip(path: Path, files: dict[str, bytes] | None = None) -> Path:
    """Записать ZIP-архив с указанными файлами."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, content in (files or {"result.json": b"{}"}).items():
            archive.writestr(name, content)
    return path


def parse_multipart(request: httpx.Request) -> dict[str, tuple[str, bytes]]:
    """Разобрать multipart-тело запроса: имя части → (заголовки, данные)."""
    content_type = request.headers["content-type"]
    boundary = content_type.split("boundary=", 1)[1].encode()

    parts: dict[str, tuple[str, bytes]] = {}
    for chunk in request.content.split(b"--" + boundary):
        if not chunk or chunk.startswith(b"--"):
            continue
        chunk = chunk.removeprefix(b"\r\n").removesuffix(b"\r\n")
        head, _, data = chunk.partition(b"\r\n\r\n")
        match = re.search(rb'name="([^"]+)"', head)
        assert match is not None, head
        parts[match.group(1).decode()] = (head.decode(), data)
    return parts


@pytest.fixture
def restore_root_logger():
    """Вернуть обработчики и уровень корневого логгера после setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
