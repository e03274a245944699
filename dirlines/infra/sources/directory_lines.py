from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterator

from dirlines.common.encoding import checkLineEncoding
from dirlines.domain.exceptions import FileReadError
from dirlines.infra.sources.directory_listing import list_directory_files

_logger = logging.getLogger(__name__)


class DirectoryLinesStreamer:
    """
    Назначение/ответственность:
        Ленивая однопроходная последовательность строк всех обычных файлов каталога.
        Файлы читаются целиком по очереди в натуральном порядке имён.

    Состояние:
        files       - снимок отсортированного списка, не меняется после создания;
        index       - индекс текущего файла;
        handle      - открытый файл или None;
        exhausted   - последовательность закончилась (или стример закрыт);
        failure     - FileReadError, после которого стример сломан.

    Инварианты/гарантии:
        - Открыт не более одного файла; он закрывается до открытия следующего.
        - Строки отдаются вместе с терминатором, как в файле; разделитель только b"\\n".
        - После конца последовательности next_line() всегда возвращает None.
        - После FileReadError каждый следующий вызов поднимает ту же ошибку.
        - Экземпляр не потокобезопасен.
    """

    def __init__(
        self,
        directory: Path,
        files: tuple[Path, ...],
        encoding: str = "utf-8",
        logger: logging.Logger | None = None,
    ) -> None:
        self.directory = directory
        self._files = files
        self.encoding = encoding
        self.logger = logger or _logger
        self._index = 0
        self._handle: BinaryIO | None = None
        self._line_no = 0
        self._exhausted = not files
        self._failure: FileReadError | None = None

    @classmethod
    def from_dir(
        cls,
        path: str | Path,
        *,
        encoding: str = "utf-8",
        logger: logging.Logger | None = None,
    ) -> "DirectoryLinesStreamer":
        """
        Назначение:
            Создаёт стример: проверяет каталог и снимает отсортированный список файлов.
            Ни один файл не открывается.

        Поведение:
            - DirectoryError (NOT_FOUND, NOT_A_DIRECTORY, PERMISSION_DENIED, LIST_FAILED).
            - Пустой каталог допустим: стример сразу исчерпан.
            - ValueError, если encoding не позволяет резать строки по b"\\n".
        """
        checkLineEncoding(encoding)
        directory = Path(path)
        files = list_directory_files(directory)
        streamer = cls(directory, files, encoding=encoding, logger=logger)
        streamer.logger.debug("files in %s: %s", directory, [str(p) for p in files])
        return streamer

    @property
    def files(self) -> tuple[Path, ...]:
        return self._files

    @property
    def current_path(self) -> Path | None:
        if self._handle is None:
            return None
        return self._files[self._index]

    @property
    def line_no(self) -> int:
        return self._line_no

    @property
    def files_done(self) -> int:
        return self._index

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def next_line(self) -> str | None:
        """
        Назначение:
            Отдаёт следующую строку или None, если файлы кончились.

        Алгоритм:
            - Нет открытого файла: открыть files[index].
            - Прочитать строку; на EOF закрыть файл, сдвинуть index и повторить.
        """
        if self._failure is not None:
            raise self._failure.with_traceback(None)

        while not self._exhausted:
            if self._handle is None:
                self._open_current()

            raw = self._read_raw_line()
            if raw:
                return raw.decode(self.encoding, errors="replace")

            self._close_handle()
            self._index += 1
            if self._index >= len(self._files):
                self.logger.debug("all files of %s consumed", self.directory)
                self._exhausted = True

        return None

    def collect(self) -> list[str]:
        """
        Назначение:
            Материализует все оставшиеся строки.
        """
        return list(self)

    def close(self) -> None:
        """
        Назначение:
            Освобождает открытый файл и завершает последовательность досрочно.
        """
        self._close_handle()
        self._exhausted = True

    def _open_current(self) -> None:
        path = self._files[self._index]
        self.logger.debug("opening file %s", path)
        try:
            self._handle = open(path, "rb")
        except OSError as exc:
            self._fail(FileReadError(path=str(path), reason=exc.strerror or str(exc)), exc)
        self._line_no = 0

    def _read_raw_line(self) -> bytes:
        path = self._files[self._index]
        try:
            raw = self._handle.readline()
        except OSError as exc:
            self._fail(
                FileReadError(path=str(path), line_no=self._line_no + 1, reason=exc.strerror or str(exc)),
                exc,
            )
        if raw:
            self._line_no += 1
        return raw

    def _fail(self, error: FileReadError, cause: OSError) -> None:
        self.logger.error("%s", error)
        self._close_handle()
        self._exhausted = True
        error.__cause__ = cause
        self._failure = error
        raise error

    def _close_handle(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = self.next_line()
        if line is None:
            raise StopIteration
        return line

    def __enter__(self) -> "DirectoryLinesStreamer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_handle", None) is not None:
            self._close_handle()

    def __repr__(self) -> str:
        return (
            f"DirectoryLinesStreamer(directory={str(self.directory)!r}, "
            f"files={len(self._files)}, index={self._index}, exhausted={self._exhausted})"
        )


__all__ = ["DirectoryLinesStreamer"]
