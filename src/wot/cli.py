"""Точка входа CLI wot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from wot import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def positive_int(value: str) -> int:
    """argparse-тип: целое число > 0."""
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number <= 0:
        raise argparse.ArgumentTypeError(f"ID должен быть целым числом > 0, получено: '{value}'")
    return number


def file_name_arg(value: str) -> str:
    """argparse-тип: имя генерируемого файла теста."""
    from wot.exceptions import InvalidTestFileNameError
    from wot.utils.naming import validate_test_file_name

    try:
        return validate_test_file_name(value)
    except InvalidTestFileNameError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wot",
        description="CLI для Allure TestOps: загрузка отчётов и импорт тест-кейсов (WrapperOverTestops)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Уровень логирования (переопределяет WOT_LOG_LEVEL)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"wot {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    report = subparsers.add_parser("report", help="Загрузить отчёт в TestOps")
    report.add_argument(
        "-d", "--directory-path",
        required=True,
        help="Директория с результатами тестов (allure-results)",
    )
    report.add_argument(
        "-p", "--project-id",
        required=True,
        type=positive_int,
        help="ID проекта в Allure TestOps",
    )

    testcase = subparsers.add_parser("testcase", help="Создать шаблон теста по тест-кейсу")
    testcase.add_argument(
        "-i", "--import-testcase-id",
        required=True,
        type=positive_int,
        help="ID тест-кейса в Allure TestOps",
    )
    testcase.add_argument(
        "-f", "--filename",
        type=file_name_arg,
        default=None,
        help="Имя файла без .py: 6-120 символов, префикс test_, только a-z, 0-9, _ "
             "(по умолчанию test_case_<id>)",
    )
    return parser


async def async_main(args: argparse.Namespace) -> int:
    """Загрузить конфигурацию и выполнить команду. Возвращает код выхода."""
    # Отложенные импорты — чтобы --help работал быстро
    from pathlib import Path

    from pydantic import ValidationError

    from wot.clients.testops_client import TestOpsClient
    from wot.config import Settings, load_config, prompt_config, save_config
    from wot.exceptions import ConfigurationError, UploadCancelledByUser, WotError
    from wot.logging_config import setup_logging
    from wot.services.report_service import ReportUploadService
    from wot.services.testcase_service import import_test_case
    from wot.utils.naming import default_test_file_name

    # 1. Настройки приложения
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Ошибка конфигурации: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    # 2. Логирование
    setup_logging(args.log_level or settings.log_level)

    # 3. Первый запуск: создаём config.json и выходим
    config_path = settings.config_path
    if not config_path.exists():
        logger.info("Конфиг %s не найден, запускаем первичную настройку", config_path)
        try:
            save_config(config_path, prompt_config())
        except ConfigurationError as exc:
            logger.error("Ошибка конфигурации: %s", exc)
            return EXIT_CONFIG_ERROR
        return EXIT_OK

    if args.command is None:
        logger.error("Не указана команда. Доступные команды: wot --help")
        return EXIT_CONFIG_ERROR

    # 4. Доступы к TestOps и клиент
    try:
        config = load_config(config_path)
        client = TestOpsClient.create(
            config.testops_base_url,
            config.testops_api_token,
            timeout=settings.request_timeout,
            ssl_verify=settings.ssl_verify,
            max_pages=settings.max_pages,
        )
    except ConfigurationError as exc:
        logger.error("Ошибка конфигурации: %s", exc)
        return EXIT_CONFIG_ERROR
    except WotError as exc:
        logger.error("Ошибка конфигурации клиента: %s", exc)
        return EXIT_CONFIG_ERROR

    # 5. Команда
    try:
        async with client:
            if args.command == "report":
                service = ReportUploadService(
                    client,
                    base_url=config.testops_base_url,
                    archive_dir=settings.config_dir,
                )
                link = await service.send_report(Path(args.directory_path), args.project_id)
                print(link)
            elif args.command == "testcase":
                file_stem = args.filename or default_test_file_name(args.import_testcase_id)
                path = await import_test_case(client, args.import_testcase_id, file_stem)
                print(f"File created: {path}")
    except UploadCancelledByUser:
        logger.info("Загрузка отменена пользователем")
        return EXIT_OK
    except WotError as exc:
        logger.error("Ошибка: %s", exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.info("Прервано пользователем")
        return EXIT_INTERRUPTED

    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> None:
    """Синхронная точка входа для CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = asyncio.run(async_main(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
