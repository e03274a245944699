from __future__ import annotations

import logging
from typing import Callable

from dirlines.domain.exceptions import FileReadError
from dirlines.infra.artifacts.report_writer import RunReport
from dirlines.infra.logging.setup import logEvent
from dirlines.infra.sources.directory_lines import DirectoryLinesStreamer


class StreamLinesUseCase:
    """
    Назначение/ответственность:
        Вычитывает стример до конца, передаёт строки в sink и заполняет summary отчёта.
    Взаимодействия:
        Вызывается из CLI (cat/stats); стример создаётся снаружи.
    """

    def __init__(self, sink: Callable[[str], object] | None = None) -> None:
        self.sink = sink

    def run(
        self,
        streamer: DirectoryLinesStreamer,
        logger: logging.Logger,
        run_id: str,
        report: RunReport,
    ) -> int:
        """
        Выходные данные:
            int
                0 - все файлы прочитаны, 1 - чтение оборвалось на FileReadError.
        """
        summary = report.summary
        summary.files_total = len(streamer.files)
        logEvent(logger, logging.INFO, run_id, "stream", f"Files to read: {summary.files_total}")

        try:
            with streamer:
                for line in streamer:
                    summary.lines += 1
                    summary.chars += len(line)
                    if self.sink is not None:
                        self.sink(line)
        except FileReadError as exc:
            summary.files_read = streamer.files_done
            report.error = exc.to_dict()
            logEvent(logger, logging.ERROR, run_id, "stream", f"Stream aborted: {exc}")
            return 1

        summary.files_read = streamer.files_done
        logEvent(
            logger,
            logging.INFO,
            run_id,
            "stream",
            f"Stream finished: files={summary.files_read} lines={summary.lines}",
        )
        return 0
