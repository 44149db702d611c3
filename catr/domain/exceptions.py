from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from catr.domain.error_codes import ErrorCode


@dataclass(eq=False)
class CatError(Exception):
    """
    Назначение:
        Базовая ошибка catr с кодом из ErrorCode.
    """

    code: ErrorCode
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SourceOpenError(CatError):
    """
    Назначение:
        Источник не удалось открыть (нет файла, нет прав).
    Инварианты/гарантии:
        - Не фатальна: эмиттер печатает диагностику и переходит к следующему источнику.
    """

    def __init__(self, identifier: str, detail: str) -> None:
        super().__init__(
            code=ErrorCode.SOURCE_OPEN_FAILED,
            message=f"Failed to open {identifier}: {detail}",
            details={"source": identifier, "detail": detail},
        )
        self.identifier = identifier
        self.detail = detail


class SourceReadError(CatError):
    """
    Назначение:
        Ошибка чтения уже открытого источника (I/O, невалидная кодировка).
    Инварианты/гарантии:
        - Фатальна: оставшиеся источники не обрабатываются.
    """

    def __init__(self, identifier: str, detail: str, line_no: int | None = None) -> None:
        location = f" at line {line_no}" if line_no is not None else ""
        super().__init__(
            code=ErrorCode.SOURCE_READ_FAILED,
            message=f"Failed to read {identifier}{location}: {detail}",
            details={"source": identifier, "detail": detail, "line_no": line_no},
        )
        self.identifier = identifier
        self.detail = detail
        self.line_no = line_no


class ConfigError(CatError):
    """
    Назначение:
        Некорректные аргументы или настройки запуска.
    """

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFIG_INVALID, message=message)


__all__ = ["CatError", "SourceOpenError", "SourceReadError", "ConfigError"]
