from __future__ import annotations

import logging
import time
from pathlib import Path

import typer

from dirlines.common.run_id import generate_run_id
from dirlines.common.time import getDurationMs
from dirlines.config.config import Settings, loadSettings
from dirlines.domain.exceptions import DirectoryError
from dirlines.infra.artifacts.report_writer import RunReport, createEmptyReport, finalizeReport, writeReportJson
from dirlines.infra.logging.setup import closeCommandLogger, createCommandLogger, logEvent, mapLogLevel
from dirlines.infra.sources.directory_lines import DirectoryLinesStreamer
from dirlines.infra.sources.directory_listing import list_directory_files
from dirlines.usecases.stream_lines_usecase import StreamLinesUseCase

app = typer.Typer(no_args_is_help=True, add_completion=False)


def ensureDir(path: str) -> None:
    """
    Назначение:
        Создаёт каталог, если он отсутствует.
    """
    Path(path).mkdir(parents=True, exist_ok=True)


def reportDirectoryError(logger: logging.Logger, runId: str, report: RunReport, exc: DirectoryError) -> int:
    """
    Назначение:
        Единая обработка ошибки этапа подготовки: лог, отчёт, stderr.

    Выходные данные:
        int
            Exit code 2.
    """
    report.error = exc.to_dict()
    logEvent(logger, logging.ERROR, runId, "listing", str(exc))
    typer.echo(f"ERROR: {exc}", err=True)
    return 2


def runWithReport(ctx: typer.Context, commandName: str, directory: str, runner) -> None:
    """
    Назначение:
        Унифицированная обвязка выполнения команд:
        - создаёт логгер + файл лога
        - создаёт report.json skeleton
        - гарантирует запись отчёта в finally

    Входные данные:
        ctx: typer.Context
        commandName: str
        directory: str
            Каталог, переданный команде.
        runner: Callable[[logging.Logger, RunReport], int]
            Тело команды, возвращает exit code.
    """
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]
    sources = ctx.obj["sources"]

    startMonotonic = time.monotonic()

    logger, logFilePath = createCommandLogger(
        commandName=commandName,
        logDir=settings.log_dir,
        runId=runId,
        logLevel=settings.log_level,
    )

    report = createEmptyReport(runId=runId, command=commandName, configSources=sources)
    report.meta.directory = directory

    exitCode: int | None = None

    try:
        logEvent(logger, logging.INFO, runId, "core", "Command started")
        logEvent(
            logger,
            logging.INFO,
            runId,
            "config",
            f"command={commandName} directory={directory} encoding={settings.encoding} sources={sources}",
        )
        exitCode = runner(logger, report)
    finally:
        durationMs = getDurationMs(startMonotonic, time.monotonic())
        finalizeReport(report=report, durationMs=durationMs, logFile=logFilePath, exitCode=exitCode)
        reportPath = writeReportJson(report, settings.report_dir, f"report_{commandName}_{runId}")
        logEvent(logger, logging.INFO, runId, "report", f"Report written: {reportPath}")
        closeCommandLogger(logger)

    if exitCode:
        raise typer.Exit(code=exitCode)


def runLsCommand(ctx: typer.Context, directory: str) -> None:
    runId = ctx.obj["runId"]

    def execute(logger, report) -> int:
        try:
            files = list_directory_files(directory)
        except DirectoryError as exc:
            return reportDirectoryError(logger, runId, report, exc)
        report.summary.files_total = len(files)
        for path in files:
            typer.echo(str(path))
        logEvent(logger, logging.INFO, runId, "listing", f"Files listed: {len(files)}")
        return 0

    runWithReport(ctx=ctx, commandName="ls", directory=directory, runner=execute)


def runStreamCommand(ctx: typer.Context, commandName: str, directory: str, printLines: bool) -> None:
    """
    Назначение:
        Общая реализация cat/stats: создаёт стример и прогоняет StreamLinesUseCase.
    """
    settings: Settings = ctx.obj["settings"]
    runId = ctx.obj["runId"]

    def execute(logger, report) -> int:
        try:
            streamer = DirectoryLinesStreamer.from_dir(directory, encoding=settings.encoding, logger=logger)
        except DirectoryError as exc:
            return reportDirectoryError(logger, runId, report, exc)

        sink = (lambda line: typer.echo(line, nl=False, color=True)) if printLines else None
        code = StreamLinesUseCase(sink=sink).run(streamer, logger, runId, report)
        if code != 0:
            typer.echo(f"ERROR: {report.error['message']}", err=True)
            return code
        if not printLines:
            summary = report.summary
            typer.echo(f"files={summary.files_read} lines={summary.lines} chars={summary.chars}")
        return 0

    runWithReport(ctx=ctx, commandName=commandName, directory=directory, runner=execute)


@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs."),
    reportDir: str | None = typer.Option(None, "--report-dir", help="Directory for reports."),
    encoding: str | None = typer.Option(None, "--encoding", help="Text encoding of the files (default utf-8)."),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - создаёт каталоги log/report
        - сохраняет всё в ctx.obj для подкоманд
    """
    if not runId:
        runId = generate_run_id()

    cliOverrides = {
        "log_level": logLevel,
        "log_dir": logDir,
        "report_dir": reportDir,
        "encoding": encoding,
    }
    try:
        loaded = loadSettings(config_path=config, cli_overrides=cliOverrides)
        mapLogLevel(loaded.settings.log_level)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=2)

    ensureDir(loaded.settings.log_dir)
    ensureDir(loaded.settings.report_dir)

    ctx.obj = {
        "runId": runId,
        "settings": loaded.settings,
        "sources": loaded.sources_used,
    }


@app.command("ls")
def ls(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Directory to list"),
):
    """Print regular files of DIRECTORY in natural order."""
    runLsCommand(ctx, directory)


@app.command("cat")
def cat(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Directory to read"),
):
    """Print every line of every file of DIRECTORY, file by file."""
    runStreamCommand(ctx, "cat", directory, printLines=True)


@app.command("stats")
def stats(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Directory to read"),
):
    """Count files, lines and characters of DIRECTORY."""
    runStreamCommand(ctx, "stats", directory, printLines=False)


if __name__ == "__main__":
    app()
