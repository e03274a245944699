from __future__ import annotations

from pathlib import Path

from dirlines.domain.error_codes import ErrorCode
from dirlines.domain.exceptions import DirectoryError
from dirlines.domain.natural_sort import sort_names


def _validate_directory(directory: Path) -> None:
    if not directory.exists():
        raise DirectoryError(code=ErrorCode.NOT_FOUND, path=str(directory))
    if not directory.is_dir():
        raise DirectoryError(code=ErrorCode.NOT_A_DIRECTORY, path=str(directory))


def list_directory_files(path: str | Path) -> tuple[Path, ...]:
    """
    Назначение:
        Снимок списка обычных файлов каталога в натуральном порядке имён.

    Входные данные:
        path: str | Path
            Каталог. Относительный путь остаётся относительным.

    Выходные данные:
        tuple[Path, ...]
            directory / name для каждого обычного файла.

    Поведение:
        - Симлинки разыменовываются: попадают в список, если цель обычный файл.
        - Подкаталоги, битые симлинки, FIFO, сокеты и устройства пропускаются.
        - Сортировка только по имени файла (sort_names), без учёта каталога.
        - Ошибки ОС при листинге превращаются в DirectoryError.
    """
    directory = Path(path)
    _validate_directory(directory)

    try:
        names = [entry.name for entry in directory.iterdir() if entry.is_file()]
    except OSError as exc:
        raise DirectoryError(
            code=ErrorCode.from_os_error(exc),
            path=str(directory),
            reason=exc.strerror,
        ) from exc

    return tuple(directory / name for name in sort_names(names))


__all__ = ["list_directory_files"]
