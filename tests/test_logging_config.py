"""Тесты настройки логирования."""

from __future__ import annotations

import io
import logging

from wot.logging_config import setup_logging


def test_info_level_uses_short_format(restore_root_logger) -> None:
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)

    logging.getLogger("wot.test").info("Готово")
    logging.getLogger("wot.test").debug("скрыто")

    assert stream.getvalue() == "INFO: Готово\n"

def test_debug_level_uses_detailed_format(restore_root_logger) -> None:
    stream = io.StringIO()
    setup_logging("debug", stream=stream)

    logging.getLogger("wot.test").debug("Детали")

    assert "| DEBUG   | wot.test | Детали" in stream.getvalue()

def test_repeated_setup_does_not_duplicate_handlers(restore_root_logger) -> None:
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)
    setup_logging("INFO", stream=stream)

    logging.getLogger("wot.test").warning("Один раз")

    assert stream.getvalue().count("Один раз") == 1

def test_http_libraries_are_quiet(restore_root_logger) -> None:
    setup_logging("DEBUG", stream=io.StringIO())

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
