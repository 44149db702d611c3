from __future__ import annotations

import logging
from typing import TextIO

from catr.domain.exceptions import CatError, SourceReadError
from catr.domain.models import CatConfig, EmitSummary
from catr.domain.numbering import LineNumberer
from catr.domain.ports.sources import LineSource, SourceOpener
from catr.infra.logging.setup import log_event


class LineEmitter:
    """
    Назначение/ответственность:
        Ядро catr: последовательно открывает источники и печатает их строки
        с выбранной политикой нумерации.
    Инварианты/гарантии:
        - Источник k+1 открывается только после того, как источник k исчерпан
          или не открылся.
        - Ошибка открытия печатается в err и не прерывает прогон.
        - Ошибка чтения фатальна: источник закрывается, SourceReadError пробрасывается.
        - Каждая строка вывода сбрасывается (flush) сразу после записи.
    Взаимодействия:
        opener: SourceOpener (infra/sources), logger: логгер команды.
    """

    def __init__(
        self,
        opener: SourceOpener,
        out: TextIO,
        err: TextIO,
        logger: logging.Logger,
        run_id: str,
    ) -> None:
        self.opener = opener
        self.out = out
        self.err = err
        self.logger = logger
        self.run_id = run_id

    def run(self, config: CatConfig) -> EmitSummary:
        summary = EmitSummary(sources_total=len(config.sources))
        log_event(
            self.logger,
            logging.INFO,
            self.run_id,
            "emit",
            f"Emitting sources={len(config.sources)} mode={config.mode.value}",
        )

        for identifier in config.sources:
            try:
                source = self.opener(identifier)
            except CatError as exc:
                if exc.code.fatal:
                    log_event(self.logger, logging.ERROR, self.run_id, "source", exc.message)
                    raise
                summary.sources_failed += 1
                summary.failed_sources.append(identifier)
                self._write(self.err, exc.message)
                log_event(self.logger, logging.ERROR, self.run_id, "source", exc.message)
                continue

            summary.sources_opened += 1
            log_event(self.logger, logging.DEBUG, self.run_id, "source", f"Opened {identifier}")
            self._drain(source, config, summary)

        log_event(
            self.logger,
            logging.INFO,
            self.run_id,
            "emit",
            f"Done opened={summary.sources_opened} failed={summary.sources_failed} lines={summary.lines_written}",
        )
        return summary

    def _drain(self, source: LineSource, config: CatConfig, summary: EmitSummary) -> None:
        numberer = LineNumberer(config.mode)
        lines = 0
        try:
            for text in source:
                lines += 1
                self._write(self.out, numberer.format(text))
                summary.lines_written += 1
        except SourceReadError as exc:
            log_event(self.logger, logging.ERROR, self.run_id, "source", exc.message)
            raise
        finally:
            source.close()

        log_event(
            self.logger,
            logging.DEBUG,
            self.run_id,
            "source",
            f"Drained {source.identifier} lines={lines}",
        )

    @staticmethod
    def _write(stream: TextIO, text: str) -> None:
        stream.write(text + "\n")
        stream.flush()


__all__ = ["LineEmitter"]
