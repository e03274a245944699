from __future__ import annotations

import errno
from enum import Enum


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов ошибок чтения каталога.
    """

    NOT_FOUND = "NOT_FOUND"
    NOT_A_DIRECTORY = "NOT_A_DIRECTORY"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    LIST_FAILED = "LIST_FAILED"
    FILE_READ_ERROR = "FILE_READ_ERROR"

    @classmethod
    def from_os_error(cls, exc: OSError) -> "ErrorCode":
        """
        Назначение:
            Подбор кода этапа листинга по errno.
        """
        if exc.errno == errno.ENOENT:
            return cls.NOT_FOUND
        if exc.errno == errno.ENOTDIR:
            return cls.NOT_A_DIRECTORY
        if exc.errno in (errno.EACCES, errno.EPERM):
            return cls.PERMISSION_DENIED
        return cls.LIST_FAILED
