"""Упаковка директории с результатами тестов в ZIP-архив."""

from __future__ import annotations

import logging
import time
import zipfile
from pathlib import Path

from wot.exceptions import ArchiveError, DirectoryNotFoundError

logger = logging.getLogger(__name__)

ARCHIVE_NAME_TEMPLATE = "testops_results_report_{timestamp}.zip"


def archive_path(archive_dir: Path, timestamp: int | None = None) -> Path:
    """Путь к архиву с Unix-временем в имени."""
    if timestamp is None:
        timestamp = int(time.time())
    return archive_dir / ARCHIVE_NAME_TEMPLATE.format(timestamp=timestamp)


def zip_directory(directory: Path, archive_dir: Path) -> Path:
    """Заархивировать файлы верхнего уровня директории.

    Поддиректории не обходятся. Архив создаётся в ``archive_dir``;
    при ошибке частично записанный файл удаляется.

    Returns:
        Путь к созданному архиву.

    Raises:
        DirectoryNotFoundError: Директории нет или её нельзя прочитать.
        ArchiveError: Не удалось создать ``archive_dir`` или записать архив.
    """
    try:
        entries = sorted(p for p in directory.iterdir() if p.is_file())
    except OSError as exc:
        raise DirectoryNotFoundError(str(directory)) from exc

    target = archive_path(archive_dir)
    try:
        archive_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArchiveError(str(target), str(exc)) from exc

    try:
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry in entries:
                archive.write(entry, arcname=entry.name)
    except OSError as exc:
        target.unlink(missing_ok=True)
        raise ArchiveError(str(target), str(exc)) from exc
    except BaseException:
        target.unlink(missing_ok=True)
        raise

    logger.info("Создан архив %s (%d файлов)", target, len(entries))
    return target
