from dirlines.domain.error_codes import ErrorCode
from dirlines.domain.exceptions import DirectoryError, DirLinesError, FileReadError
from dirlines.domain.natural_sort import compare_names, natural_sort_key, sort_names
from dirlines.infra.sources.directory_lines import DirectoryLinesStreamer
from dirlines.infra.sources.directory_listing import list_directory_files

__all__ = [
    "ErrorCode",
    "DirLinesError",
    "DirectoryError",
    "FileReadError",
    "compare_names",
    "natural_sort_key",
    "sort_names",
    "DirectoryLinesStreamer",
    "list_directory_files",
]
