"""Базовый HTTP-клиент: аутентификация, JSON, multipart и таксономия ошибок."""

from __future__ import annotations

import logging
import secrets
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from wot.exceptions import (
    ApiStatusError,
    DeserializationError,
    InvalidApiKeyError,
    NetworkError,
    UrlParseError,
)

logger = logging.getLogger(__name__)

APPLICATION_JSON = "application/json"
DEFAULT_TIMEOUT = 10

ModelT = TypeVar("ModelT", bound=BaseModel)

# Поле multipart-формы в формате httpx: (имя, (filename, content, content_type))
MultipartFiles = list[tuple[str, tuple[str | None, bytes | str, str]]]


def _build_default_headers(api_key: str) -> dict[str, str]:
    auth_value = f"Api-Token {api_key}"
    # httpx кодирует заголовки в ASCII; управляющие символы запрещены RFC 7230
    if any(not (0x20 <= ord(ch) < 0x7F) and ch != "\t" for ch in auth_value):
        raise InvalidApiKeyError()
    return {
        "Accept": APPLICATION_JSON,
        "Content-Type": APPLICATION_JSON,
        "Authorization": auth_value,
    }


def _parse_base_url(base_url: str) -> httpx.URL:
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise UrlParseError(f"Некорректный базовый URL '{base_url}': {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise UrlParseError(
            f"Базовый URL должен быть абсолютным http(s)-адресом: '{base_url}'"
        )
    return url


class BaseApiClient:
    """Единая точка аутентифицированного HTTP-доступа к TestOps.

    Делит все сбои на три класса, чтобы вызывающий код мог реагировать
    на каждый по-своему:

    - :class:`NetworkError` — транспорт (соединение, DNS, таймаут);
    - :class:`ApiStatusError` — сервер ответил не-2xx, тело сохраняется;
    - :class:`DeserializationError` — тело не соответствует модели ответа.

    Заголовки по умолчанию фиксируются при создании клиента.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        ssl_verify: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._headers = _build_default_headers(api_key)
        self._base_url = _parse_base_url(base_url)
        self._http = httpx.AsyncClient(
            headers=self._headers,
            timeout=timeout,
            verify=ssl_verify,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._base_url).rstrip("/")

    @property
    def headers(self) -> dict[str, str]:
        """Копия заголовков по умолчанию."""
        return dict(self._headers)

    def build_url(self, endpoint: str) -> str:
        """Присоединить ``endpoint`` (начинается с ``/``) к базовому URL.

        Путь базового URL сохраняется: ``https://host/prefix`` +
        ``/api/rs/project`` → ``https://host/prefix/api/rs/project``.

        Raises:
            UrlParseError: endpoint не начинается с ``/`` или результат не парсится.
        """
        if not endpoint.startswith("/"):
            raise UrlParseError(f"Эндпоинт должен начинаться с '/': '{endpoint}'")
        raw = f"{self.base_url}{endpoint}"
        try:
            return str(httpx.URL(raw))
        except httpx.InvalidURL as exc:
            raise UrlParseError(f"Некорректный URL '{raw}': {exc}") from exc

    async def get(self, endpoint: str, response_model: type[ModelT]) -> ModelT:
        """GET-запрос с десериализацией ответа в ``response_model``."""
        return await self._send("GET", endpoint, response_model)

    async def post_multipart(
        self,
        endpoint: str,
        files: MultipartFiles,
        response_model: type[ModelT],
    ) -> ModelT:
        """POST-запрос с multipart/form-data телом.

        Заголовок ``Content-Type: application/json`` по умолчанию заменяется
        на multipart с явным boundary — httpx использует его при кодировании формы.
        """
        boundary = secrets.token_hex(16)
        headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
        return await self._send(
            "POST", endpoint, response_model, files=files, headers=headers,
        )

    async def _send(
        self,
        method: str,
        endpoint: str,
        response_model: type[ModelT],
        **kwargs: Any,
    ) -> ModelT:
        url = self.build_url(endpoint)
        # Заголовки не логируются: в них API-токен
        logger.debug("HTTP-запрос: %s %s", method, url)

        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise NetworkError(str(exc) or type(exc).__name__, endpoint) from exc

        return self._handle_response(resp, endpoint, response_model)

    @staticmethod
    def _handle_response(
        resp: httpx.Response,
        endpoint: str,
        response_model: type[ModelT],
    ) -> ModelT:
        body = resp.text
        logger.debug(
            "HTTP-ответ: %s status=%d content_length=%d",
            endpoint, resp.status_code, len(resp.content),
        )

        if not resp.is_success:
            raise ApiStatusError(resp.status_code, body, endpoint)

        try:
            return response_model.model_validate_json(body)
        except ValidationError as exc:
            raise DeserializationError(str(exc), endpoint) from exc

    # --- Жизненный цикл ---

    async def close(self) -> None:
        """Освободить ресурсы HTTP-клиента."""
        await self._http.aclose()

    async def __aenter__(self) -> BaseApiClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
