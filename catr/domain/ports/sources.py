from __future__ import annotations

from typing import Iterator, Protocol


class LineSource(Protocol):
    """
    Назначение/ответственность:
        Открытый источник строк (файл или stdin).
    Взаимодействия:
        Создаётся SourceOpener, потребляется LineEmitter ровно один раз.
    """

    identifier: str

    def __iter__(self) -> Iterator[str]:
        """
        Контракт:
            Лениво отдаёт строки без терминатора.
            Ошибки чтения/декодирования -> SourceReadError.
        """
        ...

    def close(self) -> None:
        """
        Контракт:
            Освобождает дескриптор. Повторный вызов безопасен.
        """
        ...


class SourceOpener(Protocol):
    """
    Назначение/ответственность:
        Фабрика LineSource по идентификатору источника.
    """

    def __call__(self, identifier: str) -> LineSource:
        """
        Контракт:
            Вход: "-" (stdin) или путь к файлу.
            Выход: открытый LineSource либо SourceOpenError.
        """
        ...
