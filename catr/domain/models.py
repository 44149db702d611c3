from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from catr.domain.exceptions import ConfigError

STDIN_SOURCE = "-"


class NumberingMode(str, Enum):
    """
    Назначение:
        Политика нумерации строк вывода.
    Инварианты/гарантии:
        - Режимы -n и -b взаимоисключающие; одновременное включение не представимо.
    """

    PLAIN = "plain"
    NUMBER_ALL = "number"
    NUMBER_NONBLANK = "number-nonblank"

    @classmethod
    def from_flags(cls, number_lines: bool, number_nonblank_lines: bool) -> "NumberingMode":
        """
        Назначение:
            Преобразует пару CLI-флагов в режим.

        Поведение:
            - Оба флага -> ConfigError.
        """
        if number_lines and number_nonblank_lines:
            raise ConfigError("--number and --number-nonblank are mutually exclusive")
        if number_lines:
            return cls.NUMBER_ALL
        if number_nonblank_lines:
            return cls.NUMBER_NONBLANK
        return cls.PLAIN


@dataclass(frozen=True)
class CatConfig:
    """
    Назначение/ответственность:
        Неизменяемая конфигурация одного запуска: упорядоченные источники и режим нумерации.
    Инварианты/гарантии:
        - sources непустой (по умолчанию единственный "-").
    """

    sources: tuple[str, ...]
    mode: NumberingMode = NumberingMode.PLAIN

    @classmethod
    def create(
        cls,
        sources: Iterable[str] | None,
        number_lines: bool = False,
        number_nonblank_lines: bool = False,
    ) -> "CatConfig":
        resolved = tuple(sources or ())
        if not resolved:
            resolved = (STDIN_SOURCE,)
        return cls(
            sources=resolved,
            mode=NumberingMode.from_flags(number_lines, number_nonblank_lines),
        )


@dataclass
class EmitSummary:
    """
    Назначение:
        Итоги прогона эмиттера для логов и CLI.
    """

    sources_total: int = 0
    sources_opened: int = 0
    sources_failed: int = 0
    lines_written: int = 0
    failed_sources: list[str] = field(default_factory=list)


__all__ = ["STDIN_SOURCE", "NumberingMode", "CatConfig", "EmitSummary"]
