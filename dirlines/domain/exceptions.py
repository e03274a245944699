from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dirlines.domain.error_codes import ErrorCode


class DirLinesError(Exception):
    """
    Назначение:
        Общий предок ошибок построчного чтения каталога.
    """

    code: ErrorCode

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(eq=False)
class DirectoryError(DirLinesError):
    """
    Назначение:
        Ошибка этапа подготовки: каталог не найден, не каталог или не читается.
    Инварианты/гарантии:
        - Возникает только при создании стримера; частичный стример не возвращается.
    """

    code: ErrorCode
    path: str
    reason: str | None = None

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.code == ErrorCode.NOT_FOUND:
            text = f"Directory does not exist: {self.path}"
        elif self.code == ErrorCode.NOT_A_DIRECTORY:
            text = f"Path is not a directory: {self.path}"
        elif self.code == ErrorCode.PERMISSION_DENIED:
            text = f"Permission denied while listing directory: {self.path}"
        else:
            text = f"Failed to list directory: {self.path}"
        if self.reason:
            text = f"{text} ({self.reason})"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": "setup",
            "code": self.code.value,
            "message": str(self),
            "path": self.path,
        }


@dataclass(eq=False)
class FileReadError(DirLinesError):
    """
    Назначение:
        Ошибка этапа итерации: файл из списка пропал или не читается.
    Инварианты/гарантии:
        - code всегда ErrorCode.FILE_READ_ERROR.
        - line_no задан, если сбой случился при чтении строки, и None при открытии.
    """

    path: str
    line_no: int | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        super().__init__(str(self))

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.FILE_READ_ERROR

    def __str__(self) -> str:
        where = f"{self.path}" if self.line_no is None else f"{self.path}, line {self.line_no}"
        text = f"Failed to read file {where}"
        if self.reason:
            text = f"{text} ({self.reason})"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": "iteration",
            "code": self.code.value,
            "message": str(self),
            "path": self.path,
            "line_no": self.line_no,
        }


__all__ = ["DirLinesError", "DirectoryError", "FileReadError"]
