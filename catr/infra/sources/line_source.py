from __future__ import annotations

import sys
from typing import BinaryIO, Iterator, TextIO

from catr.domain.exceptions import SourceOpenError, SourceReadError
from catr.domain.models import STDIN_SOURCE


def stripTerminator(line: str) -> str:
    """
    Назначение:
        Убирает терминатор строки ("\\n" или "\\r\\n").
    """
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def describeOsError(exc: OSError) -> str:
    return exc.strerror or str(exc)


class _BinaryLineSource:
    """
    Назначение/ответственность:
        Общая часть источников: построчное чтение буферизованного байтового потока
        с декодированием в заданной кодировке.
    """

    def __init__(self, identifier: str, stream: BinaryIO, encoding: str) -> None:
        self.identifier = identifier
        self.stream = stream
        self.encoding = encoding
        self.closed = False

    def __iter__(self) -> Iterator[str]:
        line_no = 0
        while True:
            try:
                raw = self.stream.readline()
            except OSError as exc:
                raise SourceReadError(self.identifier, describeOsError(exc), line_no + 1) from exc
            if not raw:
                return
            line_no += 1
            try:
                text = raw.decode(self.encoding)
            except UnicodeDecodeError as exc:
                raise SourceReadError(self.identifier, f"invalid {self.encoding} data: {exc.reason}", line_no) from exc
            yield stripTerminator(text)

    def close(self) -> None:
        self.closed = True


class FileLineSource(_BinaryLineSource):
    """
    Назначение/ответственность:
        Источник строк из файла. Файл открывается в конструкторе,
        поэтому ошибки открытия видны сразу (SourceOpenError).
    Инварианты/гарантии:
        - Каталог не является ошибкой открытия: чтение из него невозможно,
          поэтому это SourceReadError (фатальна для всего прогона).
    """

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        try:
            stream = open(path, "rb")
        except IsADirectoryError as exc:
            raise SourceReadError(path, describeOsError(exc), 1) from exc
        except OSError as exc:
            raise SourceOpenError(path, describeOsError(exc)) from exc
        super().__init__(path, stream, encoding)

    def close(self) -> None:
        if not self.closed:
            self.stream.close()
        super().close()


class StdinLineSource(_BinaryLineSource):
    """
    Назначение/ответственность:
        Источник строк из стандартного ввода.
    Инварианты/гарантии:
        - close() не закрывает сам stdin процесса.
        - Если у потока нет байтового buffer (подменённый stdin), строки уже
          декодированы самим потоком: encoding при этом не применяется.
    """

    def __init__(self, stdin: TextIO | None = None, encoding: str = "utf-8") -> None:
        self.text_stream = stdin if stdin is not None else sys.stdin
        if self.text_stream is None:
            raise SourceOpenError(STDIN_SOURCE, "standard input is not available")
        binary = getattr(self.text_stream, "buffer", None)
        super().__init__(STDIN_SOURCE, binary, encoding)

    def __iter__(self) -> Iterator[str]:
        if self.stream is not None:
            yield from super().__iter__()
            return

        line_no = 0
        while True:
            try:
                text = self.text_stream.readline()
            except UnicodeDecodeError as exc:
                raise SourceReadError(self.identifier, f"invalid data: {exc.reason}", line_no + 1) from exc
            except OSError as exc:
                raise SourceReadError(self.identifier, describeOsError(exc), line_no + 1) from exc
            if not text:
                return
            line_no += 1
            yield stripTerminator(text)


def open_source(identifier: str, encoding: str = "utf-8", stdin: TextIO | None = None):
    """
    Назначение:
        Открывает источник по идентификатору.

    Входные данные:
        identifier: str
            "-" для stdin, иначе путь к файлу.
        encoding: str
            Кодировка декодирования строк.

    Выходные данные:
        LineSource

    Поведение:
        - Ошибка открытия -> SourceOpenError (эмиттер её не пробрасывает).
        - Каталог -> SourceReadError (эмиттер её пробрасывает).
    """
    if identifier == STDIN_SOURCE:
        return StdinLineSource(stdin=stdin, encoding=encoding)
    return FileLineSource(identifier, encoding=encoding)


class SourceOpenerFactory:
    """
    Назначение/ответственность:
        Привязывает кодировку (и, в тестах, stdin) к open_source,
        чтобы эмиттер вызывал opener(identifier).
    """

    def __init__(self, encoding: str = "utf-8", stdin: TextIO | None = None) -> None:
        self.encoding = encoding
        self.stdin = stdin

    def __call__(self, identifier: str):
        return open_source(identifier, encoding=self.encoding, stdin=self.stdin)


__all__ = [
    "FileLineSource",
    "StdinLineSource",
    "SourceOpenerFactory",
    "open_source",
    "stripTerminator",
]
