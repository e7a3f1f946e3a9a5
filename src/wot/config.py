"""Конфигурация wot: настройки приложения и файл с доступами к TestOps."""

from __future__ import annotations

import json
import logging
import re
import sys
import uuid
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wot.exceptions import ConfigurationError, InvalidTokenError, InvalidUrlError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

ENTER_INSTANCE_URL = "Enter the url of the testops instance: "
ENTER_API_TOKEN = "Enter the TestOps API key: "
COMPLETE_SETUP = "To view the available commands, type: wot --help"

_URL_RE = re.compile(r"^https?://.+$")


def _default_config_dir() -> Path:
    return Path.home() / ".config" / "wot"


class Settings(BaseSettings):
    """Настройки приложения wot.

    Значения задаются через переменные окружения с префиксом ``WOT_``
    или через файл ``.env`` в рабочей директории. Доступы к TestOps
    хранятся отдельно, в ``<config_dir>/config.json`` (см. :class:`TestOpsConfig`).
    """

    model_config = SettingsConfigDict(
        env_prefix="WOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_dir: Path = Field(
        default_factory=_default_config_dir,
        description="Директория с config.json и временными архивами отчётов",
    )
    request_timeout: int = Field(default=10, ge=1, description="Таймаут HTTP-запросов в секундах")
    max_pages: int = Field(default=50, ge=1, description="Защитный лимит на количество страниц пагинации")
    ssl_verify: bool = Field(default=True, description="Проверка SSL-сертификатов")
    log_level: str = Field(default="INFO", description="Уровень логирования")

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME


def validate_base_url(value: str) -> str:
    """Проверить URL экземпляра TestOps и убрать завершающие ``/``.

    Raises:
        InvalidUrlError: Строка не начинается с ``http://`` / ``https://``.
    """
    value = value.strip()
    if not _URL_RE.match(value):
        raise InvalidUrlError(value)
    return value.rstrip("/")


def validate_api_token(value: str) -> str:
    """Проверить, что API-токен является UUID.

    Raises:
        InvalidTokenError: Токен не парсится как UUID.
    """
    value = value.strip()
    try:
        uuid.UUID(value)
    except ValueError as exc:
        raise InvalidTokenError() from exc
    return value


class TestOpsConfig(BaseModel):
    """Содержимое ``config.json``: адрес экземпляра и API-токен."""

    __test__ = False

    testops_base_url: str
    testops_api_token: str

    @field_validator("testops_base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        try:
            return validate_base_url(value)
        except InvalidUrlError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("testops_api_token")
    @classmethod
    def _check_api_token(cls, value: str) -> str:
        try:
            return validate_api_token(value)
        except InvalidTokenError as exc:
            raise ValueError(str(exc)) from exc


def load_config(path: Path) -> TestOpsConfig:
    """Прочитать и провалидировать ``config.json``.

    Raises:
        ConfigurationError: Файл не читается или содержит некорректные данные.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Не удалось прочитать конфиг {path}: {exc}") from exc

    try:
        return TestOpsConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Не смогли распарсить конфиг {path}: {exc}") from exc


def save_config(path: Path, config: TestOpsConfig) -> None:
    """Сохранить конфиг в виде pretty-printed JSON, создав директорию при необходимости."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(config.model_dump(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise ConfigurationError(f"Не смогли создать конфиг {path}: {exc}") from exc
    logger.info("Конфиг сохранён: %s", path)


def prompt_config(
    input_stream: TextIO | None = None,
    output_stream: TextIO | None = None,
) -> TestOpsConfig:
    """Интерактивно запросить URL экземпляра и API-токен.

    Каждое значение валидируется сразу после ввода; при ошибке
    бросается исключение без повторного запроса.

    Raises:
        InvalidUrlError: Введён некорректный URL.
        InvalidTokenError: Введённый токен не является UUID.
    """
    stdin = input_stream or sys.stdin
    stdout = output_stream or sys.stdout

    print(ENTER_INSTANCE_URL, file=stdout)
    base_url = validate_base_url(stdin.readline())

    print(ENTER_API_TOKEN, file=stdout)
    api_token = validate_api_token(stdin.readline())

    print(COMPLETE_SETUP, file=stdout)
    return TestOpsConfig(testops_base_url=base_url, testops_api_token=api_token)
