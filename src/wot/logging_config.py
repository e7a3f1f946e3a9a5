"""Настройка логирования для CLI wot."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_DEBUG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
_CLI_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(level: str = "INFO", *, stream: TextIO | None = None) -> None:
    """Настроить корневой логгер.

    Логи всегда уходят в stderr: stdout занят ответами команд (ссылка на
    запуск, путь к сгенерированному файлу) и приглашением подтверждения.
    На уровне DEBUG используется подробный формат с временем и именем
    логгера, на остальных — короткий ``LEVEL: message``.

    Args:
        level: Имя уровня логирования (DEBUG, INFO, WARNING, ERROR).
        stream: Поток для вывода (по умолчанию ``sys.stderr``).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    fmt = _DEBUG_FORMAT if numeric_level <= logging.DEBUG else _CLI_FORMAT

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    # Повторный вызов не должен дублировать обработчики
    root.handlers.clear()
    root.addHandler(handler)

    # httpx на INFO логирует каждый запрос
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
