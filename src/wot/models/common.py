"""Обобщённые модели ответов Allure TestOps API."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Обобщённый пагинированный ответ от Allure TestOps API.

    Обязательны только ``content`` и ``totalPages`` — по ним строится
    пагинация. Остальные метаданные сервер может не вернуть.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: list[T] = []
    total_pages: int = Field(alias="totalPages")
    total_elements: int | None = Field(None, alias="totalElements")
    size: int | None = None
    number: int | None = None  # Номер текущей страницы (с 0)
