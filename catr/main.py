from __future__ import annotations

import io
import logging
import sys
from typing import TextIO

import typer

from catr import __version__
from catr.common.run_id import generate_run_id
from catr.config import Settings, load_settings
from catr.domain.exceptions import ConfigError, SourceReadError
from catr.domain.models import CatConfig
from catr.infra.logging.setup import close_command_logger, create_command_logger, log_event
from catr.infra.sources.line_source import SourceOpenerFactory
from catr.usecases.emit_usecase import LineEmitter

app = typer.Typer(add_completion=False, help="Concatenate FILES to standard output with optional line numbering.")

EXIT_OK = 0
EXIT_READ_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def versionCallback(value: bool) -> None:
    if value:
        typer.echo(f"catr {__version__}")
        raise typer.Exit()


def openOutputStream(encoding: str) -> TextIO:
    """
    Назначение:
        Текстовый поток поверх байтового stdout в кодировке входа,
        чтобы вывод не зависел от локали (PYTHONIOENCODING и т.п.).

    Поведение:
        - У stdout нет buffer: возвращается сам sys.stdout.
        - Иначе TextIOWrapper без перевода "\\n" в платформенный терминатор;
          после работы его нужно отдать в releaseOutputStream.
    """
    binary = getattr(sys.stdout, "buffer", None)
    if binary is None:
        return sys.stdout
    sys.stdout.flush()
    return io.TextIOWrapper(binary, encoding=encoding, newline="\n", write_through=True)


def releaseOutputStream(out: TextIO) -> None:
    if out is sys.stdout:
        return
    out.flush()
    # detach, иначе сборщик мусора закроет stdout процесса
    out.detach()


def resolveConfig(
    files: list[str] | None,
    numberLines: bool,
    numberNonblankLines: bool,
) -> CatConfig:
    """
    Назначение:
        Собирает CatConfig из аргументов CLI.

    Поведение:
        - Нет файлов -> единственный источник "-" (stdin).
        - -n и -b одновременно -> ошибка использования, exit code 2.
    """
    try:
        return CatConfig.create(files, number_lines=numberLines, number_nonblank_lines=numberNonblankLines)
    except ConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_USAGE)


def resolveSettings(
    configPath: str | None,
    encoding: str | None,
    logLevel: str | None,
    logDir: str | None,
) -> Settings:
    cliOverrides = {
        "encoding": encoding,
        "log_level": logLevel,
        "log_dir": logDir,
    }
    try:
        return load_settings(config_path=configPath, cli_overrides=cliOverrides).settings
    except ConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_USAGE)


@app.command(help="Concatenate FILES to standard output, optionally numbering lines. With no FILES, read standard input.")
def main(
    files: list[str] | None = typer.Argument(None, metavar="[FILES]...", help="Input files ('-' for stdin)"),
    numberLines: bool = typer.Option(False, "--number", "-n", help="number all output lines"),
    numberNonblankLines: bool = typer.Option(False, "--number-nonblank", "-b", help="number nonempty output lines"),
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    encoding: str | None = typer.Option(None, "--encoding", help="Input encoding (default utf-8)"),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs. If omitted, no log file is written."),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=versionCallback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Назначение:
        Печатает источники по порядку, с нумерацией строк по -n/-b.

    Выходные данные:
        exit code 0: все источники обработаны (ошибки открытия уже выведены в stderr)
        exit code 1: ошибка чтения открытого источника
        exit code 2: ошибка аргументов/настроек
    """
    catConfig = resolveConfig(files, numberLines, numberNonblankLines)
    settings = resolveSettings(config, encoding, logLevel, logDir)

    if not runId:
        runId = generate_run_id()

    logger, _logFilePath = create_command_logger(
        command_name="cat",
        log_dir=settings.log_dir,
        run_id=runId,
        log_level=settings.log_level,
    )

    exitCode = EXIT_OK
    out = openOutputStream(settings.encoding)
    try:
        log_event(logger, logging.INFO, runId, "core", "Command started")
        emitter = LineEmitter(
            opener=SourceOpenerFactory(encoding=settings.encoding),
            out=out,
            err=sys.stderr,
            logger=logger,
            run_id=runId,
        )
        emitter.run(catConfig)
    except SourceReadError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        exitCode = EXIT_READ_FAILED
    except KeyboardInterrupt:
        log_event(logger, logging.WARNING, runId, "core", "Interrupted")
        exitCode = EXIT_INTERRUPTED
    finally:
        releaseOutputStream(out)
        log_event(logger, logging.INFO, runId, "core", f"Command finished exit_code={exitCode}")
        close_command_logger(logger)

    if exitCode != EXIT_OK:
        raise typer.Exit(code=exitCode)


if __name__ == "__main__":
    app()
