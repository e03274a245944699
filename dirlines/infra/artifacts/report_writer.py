from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from dirlines.common.time import getUtcNowIso


@dataclass
class ReportMeta:
    """
    Назначение:
        Метаданные запуска команды.
    """

    run_id: str
    command: str
    started_at: str
    directory: str | None = None
    finished_at: str | None = None
    duration_ms: int | None = None
    config_sources: list[str] = field(default_factory=list)
    log_file: str | None = None


@dataclass
class ReportSummary:
    """
    Назначение:
        Счётчики чтения каталога.
    """

    files_total: int = 0
    files_read: int = 0
    lines: int = 0
    chars: int = 0


@dataclass
class RunReport:
    status: str
    meta: ReportMeta
    summary: ReportSummary
    error: dict[str, Any] | None = None


def createEmptyReport(runId: str, command: str, configSources: list[str]) -> RunReport:
    """
    Назначение:
        Создаёт пустой отчёт-скелет.

    Выходные данные:
        RunReport
    """
    meta = ReportMeta(
        run_id=runId,
        command=command,
        started_at=getUtcNowIso(),
        config_sources=list(configSources),
    )
    return RunReport(status="running", meta=meta, summary=ReportSummary())


def finalizeReport(report: RunReport, durationMs: int, logFile: str | None, exitCode: int | None) -> None:
    """
    Назначение:
        Финализирует отчёт: время завершения, длительность, итоговый статус.
    """
    report.meta.finished_at = getUtcNowIso()
    report.meta.duration_ms = durationMs
    report.meta.log_file = logFile
    report.status = "ok" if not exitCode else "failed"


def writeReportJson(report: RunReport, reportDir: str, fileBaseName: str) -> str:
    """
    Назначение:
        Записывает report.json на диск.

    Выходные данные:
        str
            Путь к файлу отчёта.
    """
    Path(reportDir).mkdir(parents=True, exist_ok=True)
    reportPath = str(Path(reportDir) / f"{fileBaseName}.json")

    data: dict[str, Any] = asdict(report)

    with open(reportPath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return reportPath
