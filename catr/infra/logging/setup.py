from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s runId=%(runId)s comp=%(component)s msg=%(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class EnsureFieldsFilter(logging.Filter):
    """
    Назначение:
        Гарантирует наличие полей runId и component в LogRecord,
        чтобы форматтер не падал KeyError.

    Входные данные:
        runId: str
            Идентификатор запуска.
        defaultComponent: str
            Компонент по умолчанию, если не задан.
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


def map_log_level(levelName: str) -> int:
    """
    Назначение:
        Преобразует строковый уровень логирования в logging level.

    Входные данные:
        levelName: str
            ERROR|WARN|INFO|DEBUG

    Выходные данные:
        int
    """
    value = (levelName or "").strip().upper()
    if value == "ERROR":
        return logging.ERROR
    if value in ("WARN", "WARNING"):
        return logging.WARNING
    if value == "INFO":
        return logging.INFO
    if value == "DEBUG":
        return logging.DEBUG
    raise ValueError(f"Unsupported log level: {levelName}")


def create_command_logger(
    command_name: str,
    log_dir: str | None,
    run_id: str,
    log_level: str,
) -> tuple[logging.Logger, str | None]:
    """
    Назначение:
        Создаёт логгер для команды и возвращает путь к log-файлу.

    Поведение:
        - log_dir не задан: только NullHandler, stdout/stderr остаются чистыми.
        - log_dir задан: каталог создаётся, пишется <command>_<run_id>.log.

    Выходные данные:
        (logger, logFilePath | None)
    """
    level = map_log_level(log_level)

    logger = logging.getLogger(f"catr.{command_name}.{run_id}")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    logger.setLevel(level)

    if not log_dir:
        logger.addHandler(logging.NullHandler())
        return logger, None

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logFilePath = str(Path(log_dir) / f"{command_name}_{run_id}.log")

    fileHandler = logging.FileHandler(logFilePath, encoding="utf-8")
    fileHandler.setLevel(level)
    fileHandler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    fileHandler.addFilter(EnsureFieldsFilter(runId=run_id))
    logger.addHandler(fileHandler)

    return logger, logFilePath


def close_command_logger(logger: logging.Logger) -> None:
    """
    Назначение:
        Закрывает файловые хендлеры после завершения команды.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def log_event(logger: logging.Logger, level: int, run_id: str, component: str, message: str) -> None:
    """
    Назначение:
        Унифицированная запись событий с runId/component.
    """
    logger.log(level, message, extra={"runId": run_id, "component": component})


__all__ = [
    "EnsureFieldsFilter",
    "map_log_level",
    "create_command_logger",
    "close_command_logger",
    "log_event",
]
