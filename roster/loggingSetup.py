from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s runId=%(runId)s comp=%(component)s msg=%(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_LEVELS = {
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


class EnsureFieldsFilter(logging.Filter):
    """
    Назначение:
        Подставляет runId и component в LogRecord, если их не передали через extra,
        чтобы форматтер не падал KeyError.
    """

    def __init__(self, runId: str, defaultComponent: str = "core"):
        super().__init__()
        self.runId = runId
        self.defaultComponent = defaultComponent

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "runId"):
            record.runId = self.runId
        if not hasattr(record, "component"):
            record.component = self.defaultComponent
        return True


class StdStreamToLogger:
    """
    Назначение:
        Stream-обёртка: построчно пишет stdout/stderr команды в лог.
    """

    def __init__(self, logger: logging.Logger, level: int, runId: str, component: str):
        self.logger = logger
        self.level = level
        self.runId = runId
        self.component = component
        self.buffer = ""

    def write(self, s: str) -> int:
        if not s:
            return 0
        self.buffer += s
        while "\n" in self.buffer:
            line, self.buffer = self.buffer.split("\n", 1)
            if line.strip():
                self._emit(line)
        return len(s)

    def flush(self) -> None:
        if self.buffer.strip():
            self._emit(self.buffer)
        self.buffer = ""

    def _emit(self, line: str) -> None:
        self.logger.log(self.level, line.rstrip(), extra={"runId": self.runId, "component": self.component})


class TeeStream:
    """Пишет одновременно в исходный поток и в StdStreamToLogger."""

    def __init__(self, primary, secondary):
        self.primary = primary
        self.secondary = secondary

    def write(self, s: str) -> int:
        written = self.primary.write(s)
        self.secondary.write(s)
        return written

    def flush(self) -> None:
        self.primary.flush()
        self.secondary.flush()


def mapLogLevel(levelName: str) -> int:
    """
    Назначение:
        Преобразует строковый уровень (ERROR|WARN|INFO|DEBUG) в logging level.
    """
    value = (levelName or "").strip().upper()
    if value not in _LEVELS:
        raise ValueError(f"Unsupported log level: {levelName}")
    return _LEVELS[value]


def createCommandLogger(commandName: str, logDir: str, runId: str, logLevel: str) -> tuple[logging.Logger, str]:
    """
    Назначение:
        Создаёт логгер команды с файловым обработчиком <command>_<runId>.log.

    Выходные данные:
        (logger, logFilePath)
    """
    Path(logDir).mkdir(parents=True, exist_ok=True)
    logFilePath = str(Path(logDir) / f"{commandName}_{runId}.log")

    logger = logging.getLogger(f"roster.{commandName}.{runId}")
    closeCommandLogger(logger)
    logger.propagate = False

    level = mapLogLevel(logLevel)
    logger.setLevel(level)

    fileHandler = logging.FileHandler(logFilePath, encoding="utf-8")
    fileHandler.setLevel(level)
    fileHandler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    fileHandler.addFilter(EnsureFieldsFilter(runId=runId))
    logger.addHandler(fileHandler)

    return logger, logFilePath


def closeCommandLogger(logger: logging.Logger) -> None:
    """Закрывает и снимает все обработчики логгера команды."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def logEvent(logger: logging.Logger, level: int, runId: str, component: str, message: str) -> None:
    logger.log(level, message, extra={"runId": runId, "component": component})
