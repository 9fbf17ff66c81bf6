from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

import typer

from roster.common.run_id import generate_run_id
from roster.config import Settings, load_settings
from roster.domain.assignments import (
    build_spans_from_timecards,
    extract_assignments,
    find_overlaps,
    index_employees_by_code,
    sort_by_start,
)
from roster.domain.contacts.display import build_directory_entry, index_current_assignments
from roster.domain.contacts.phone import format_phone
from roster.domain.project_key import explain_project_key
from roster.errors import CATEGORY_INPUT, AppError
from roster.infra.artifacts.report_writer import createEmptyReport, finalizeReport, writeReportJson
from roster.infra.http.records_client import RecordsApiClient
from roster.infra.sources.json_source import ENVELOPE_KEYS, as_record, as_record_list, read_json_file
from roster.loggingSetup import StdStreamToLogger, TeeStream, closeCommandLogger, createCommandLogger, logEvent, mapLogLevel
from roster.timeUtils import getDurationMs

app = typer.Typer(no_args_is_help=True, add_completion=False)

INPUT_HELP = "Path to a JSON file with records"
API_PATH_HELP = "API path to fetch records from (relative to --api-base-url)"
OUT_HELP = "Write JSON result to this file instead of stdout"


def ensureDir(path: str) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def requireInput(inputPath: str | None, apiPath: str | None, settings: Settings) -> None:
    """
    Назначение:
        Проверяет, что у команды есть источник записей: файл или API.

    Поведение:
        - Нет ни --input, ни --api-path -> exit code 2.
        - --api-path без api_base_url -> exit code 2.
    """
    if not inputPath and not apiPath:
        typer.echo("ERROR: --input or --api-path is required", err=True)
        raise typer.Exit(code=2)
    if not inputPath and not settings.api_base_url:
        typer.echo("ERROR: --api-path requires api_base_url (config/env/--api-base-url)", err=True)
        raise typer.Exit(code=2)


def printRunHeader(runId: str, command: str, settings: Settings, sources: list[str]) -> None:
    """Печатает сводку параметров запуска в stderr, чтобы stdout оставался JSON."""
    typer.echo(
        f"run_id={runId} command={command} api_base_url={settings.api_base_url} "
        f"log_level={settings.log_level} sources={sources}",
        err=True,
    )


def loadPayload(settings: Settings, inputPath: str | None, apiPath: str | None) -> Any:
    """
    Назначение:
        Загружает сырой JSON из файла (приоритет) или из API.
    """
    if inputPath:
        return read_json_file(inputPath)
    with RecordsApiClient(
        baseUrl=settings.api_base_url or "",
        timeoutSeconds=settings.timeout_seconds,
        tlsSkipVerify=settings.tls_skip_verify,
        caFile=settings.ca_file,
        retries=settings.retries,
        retryBackoffSeconds=settings.retry_backoff_seconds,
    ) as client:
        return client.getJson(apiPath or "")


def emitJson(data: Any, outPath: str | None) -> None:
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if outPath:
        Path(outPath).parent.mkdir(parents=True, exist_ok=True)
        Path(outPath).write_text(text, encoding="utf-8")
        typer.echo(f"Result written: {outPath}", err=True)
        return
    typer.echo(text)


def runWithReport(
    ctx: typer.Context,
    commandName: str,
    inputPath: str | None,
    apiPath: str | None,
    requiresInput: bool,
    runner,
) -> None:
    """
    Назначение:
        Общая обвязка команд:
        - логгер + файл лога
        - report.json skeleton
        - проверка источника записей
        - tee stdout/stderr в лог
        - AppError -> exit code 1, запись отчёта в finally
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
    report.meta.input = inputPath or apiPath

    originalStdout = sys.stdout
    originalStderr = sys.stderr
    sys.stdout = TeeStream(originalStdout, StdStreamToLogger(logger, logging.INFO, runId, "stdout"))
    sys.stderr = TeeStream(originalStderr, StdStreamToLogger(logger, logging.ERROR, runId, "stderr"))

    exitCode: int | None = None

    try:
        logEvent(logger, logging.INFO, runId, "core", "Command started")
        printRunHeader(runId, commandName, settings, sources)

        if requiresInput:
            try:
                requireInput(inputPath, apiPath, settings)
            except typer.Exit:
                logEvent(logger, logging.ERROR, runId, CATEGORY_INPUT, "No usable record source")
                report.add_error(CATEGORY_INPUT, "INPUT_REQUIRED", "no usable record source")
                exitCode = 2
                return

        try:
            exitCode = runner(logger, report)
        except AppError as exc:
            logEvent(logger, logging.ERROR, runId, exc.category, f"{exc.code}: {exc.message}")
            report.add_error(exc.category, exc.code, exc.message)
            typer.echo(f"ERROR: {exc.message}", err=True)
            exitCode = 1

    finally:
        durationMs = getDurationMs(startMonotonic, time.monotonic())
        finalizeReport(report=report, durationMs=durationMs, logFile=logFilePath, reportDir=settings.report_dir)
        reportPath = writeReportJson(report, settings.report_dir, f"report_{commandName}_{runId}")
        logEvent(logger, logging.INFO, runId, "report", f"Report written: {reportPath}")

        sys.stdout = originalStdout
        sys.stderr = originalStderr
        closeCommandLogger(logger)

        if exitCode is not None:
            raise typer.Exit(code=exitCode)


@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs."),
    reportDir: str | None = typer.Option(None, "--report-dir", help="Directory for reports."),
    apiBaseUrl: str | None = typer.Option(None, "--api-base-url", help="Base URL of the records API"),
    timeoutSeconds: float | None = typer.Option(None, "--timeout-seconds", help="API timeout in seconds"),
    retries: int | None = typer.Option(None, "--retries", help="Retry attempts for API calls"),
    tlsSkipVerify: bool | None = typer.Option(None, "--tls-skip-verify", help="Disable TLS verification"),
    caFile: str | None = typer.Option(None, "--ca-file", help="CA file path"),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - создаёт каталоги log/report
        - сохраняет всё в ctx.obj для подкоманд
    """
    cliOverrides = {
        "log_level": logLevel,
        "log_dir": logDir,
        "report_dir": reportDir,
        "api_base_url": apiBaseUrl,
        "timeout_seconds": timeoutSeconds,
        "retries": retries,
        "tls_skip_verify": tlsSkipVerify,
        "ca_file": caFile,
    }
    try:
        loaded = load_settings(config_path=config, cli_overrides=cliOverrides)
        mapLogLevel(loaded.settings.log_level)
    except ValueError as exc:
        typer.echo(f"ERROR: invalid settings: {exc}", err=True)
        raise typer.Exit(code=2)

    ensureDir(loaded.settings.log_dir)
    ensureDir(loaded.settings.report_dir)

    ctx.obj = {
        "runId": runId or generate_run_id(),
        "settings": loaded.settings,
        "sources": loaded.sources_used,
        "configPath": config,
    }


@app.command()
def assignments(
    ctx: typer.Context,
    input: str | None = typer.Option(None, "--input", help=INPUT_HELP),
    apiPath: str | None = typer.Option(None, "--api-path", help=API_PATH_HELP),
    out: str | None = typer.Option(None, "--out", help=OUT_HELP),
    sort: bool = typer.Option(False, "--sort", help="Sort assignments by start date"),
):
    """Build timeline assignments from employee records."""

    def execute(logger, report) -> int:
        employees = as_record_list(loadPayload(ctx.obj["settings"], input, apiPath))
        items = extract_assignments(employees)
        if sort:
            items = sort_by_start(items)
        report.add_op("assignments", count_in=len(employees), count_out=len(items))
        logEvent(logger, logging.INFO, ctx.obj["runId"], "assignments", f"employees={len(employees)} assignments={len(items)}")
        emitJson([item.to_dict() for item in items], out)
        return 0

    runWithReport(ctx, "assignments", input, apiPath, True, execute)


@app.command()
def overlaps(
    ctx: typer.Context,
    input: str | None = typer.Option(None, "--input", help=INPUT_HELP),
    apiPath: str | None = typer.Option(None, "--api-path", help=API_PATH_HELP),
    out: str | None = typer.Option(None, "--out", help=OUT_HELP),
):
    """Report employees with overlapping assignments."""

    def execute(logger, report) -> int:
        employees = as_record_list(loadPayload(ctx.obj["settings"], input, apiPath))
        items = extract_assignments(employees)
        found = find_overlaps(items)
        report.add_op("overlaps", count_in=len(items), count_out=len(found))
        if found:
            logEvent(logger, logging.WARNING, ctx.obj["runId"], "overlaps", f"overlaps={len(found)}")
        emitJson([overlap.to_dict() for overlap in found], out)
        return 0

    runWithReport(ctx, "overlaps", input, apiPath, True, execute)


@app.command()
def spans(
    ctx: typer.Context,
    input: str | None = typer.Option(None, "--input", help=INPUT_HELP),
    apiPath: str | None = typer.Option(None, "--api-path", help=API_PATH_HELP),
    employees: str | None = typer.Option(None, "--employees", help="JSON file with employee records (code lookup)"),
    out: str | None = typer.Option(None, "--out", help=OUT_HELP),
):
    """Build timeline spans from timecard rows."""

    def execute(logger, report) -> int:
        rows = as_record_list(loadPayload(ctx.obj["settings"], input, apiPath))
        index = index_employees_by_code(as_record_list(read_json_file(employees))) if employees else {}
        items = build_spans_from_timecards(rows, index)
        report.add_op("spans", count_in=len(rows), count_out=len(items))
        logEvent(logger, logging.INFO, ctx.obj["runId"], "spans", f"rows={len(rows)} spans={len(items)} employees={len(index)}")
        emitJson([item.to_dict() for item in items], out)
        return 0

    runWithReport(ctx, "spans", input, apiPath, True, execute)


@app.command("project-keys")
def projectKeys(
    ctx: typer.Context,
    input: str | None = typer.Option(None, "--input", help=INPUT_HELP),
    apiPath: str | None = typer.Option(None, "--api-path", help=API_PATH_HELP),
    out: str | None = typer.Option(None, "--out", help=OUT_HELP),
):
    """Resolve the project key of every timecard row."""

    def execute(logger, report) -> int:
        payload = loadPayload(ctx.obj["settings"], input, apiPath)
        if isinstance(payload, dict) and not any(isinstance(payload.get(key), list) for key in ENVELOPE_KEYS):
            rows = [as_record(payload)]
        else:
            rows = as_record_list(payload)
        result = []
        for row in rows:
            tier, key = explain_project_key(row)
            result.append({"tier": tier, "projectKey": key})
        unknown = sum(1 for item in result if item["tier"] == "fallback")
        report.add_op("project_keys", count_in=len(rows), count_out=len(result))
        logEvent(logger, logging.INFO, ctx.obj["runId"], "project_keys", f"rows={len(rows)} unknown={unknown}")
        emitJson(result, out)
        return 0

    runWithReport(ctx, "project-keys", input, apiPath, True, execute)


@app.command()
def phone(
    ctx: typer.Context,
    raw: str = typer.Argument("", help="Raw phone string, e.g. '555-123-4567; 555-000-1111 x12'"),
):
    """Format a raw phone string for display."""

    def execute(logger, report) -> int:
        channel = format_phone(raw)
        report.add_op("phone", count_in=1, count_out=1 if channel.href else 0)
        emitJson(channel.to_dict(), None)
        return 0

    runWithReport(ctx, "phone", None, None, False, execute)


@app.command()
def directory(
    ctx: typer.Context,
    input: str | None = typer.Option(None, "--input", help=INPUT_HELP),
    apiPath: str | None = typer.Option(None, "--api-path", help=API_PATH_HELP),
    assignments: str | None = typer.Option(
        None, "--assignments", help="JSON file with current assignments (workGroup/project overlay by CEC id)"
    ),
    status: str | None = typer.Option(None, "--status", help="Keep only entries with this status: active|inactive|terminated|other"),
    out: str | None = typer.Option(None, "--out", help=OUT_HELP),
):
    """Build directory entries (name, CEC id, phone, status, travel, scope) for employee records."""

    def execute(logger, report) -> int:
        employees = as_record_list(loadPayload(ctx.obj["settings"], input, apiPath))
        assignMap = index_current_assignments(as_record_list(read_json_file(assignments))) if assignments else {}
        entries = [build_directory_entry(employee, assignMap) for employee in employees]
        if status:
            entries = [entry for entry in entries if entry["status"] == status.strip().lower()]
        callable_count = sum(1 for entry in entries if entry["phone"]["href"])
        leased_count = sum(1 for entry in entries if entry["leased"])
        report.add_op("directory", count_in=len(employees), count_out=len(entries))
        logEvent(
            logger,
            logging.INFO,
            ctx.obj["runId"],
            "directory",
            f"employees={len(employees)} entries={len(entries)} callable={callable_count} leased={leased_count}",
        )
        emitJson(entries, out)
        return 0

    runWithReport(ctx, "directory", input, apiPath, True, execute)


if __name__ == "__main__":
    app()
