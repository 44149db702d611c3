from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов ошибок catr.
    """

    SOURCE_OPEN_FAILED = "SOURCE_OPEN_FAILED"
    SOURCE_READ_FAILED = "SOURCE_READ_FAILED"
    CONFIG_INVALID = "CONFIG_INVALID"

    @property
    def fatal(self) -> bool:
        """
        Назначение:
            Признак ошибки, прерывающей весь запуск.
        """
        return self is not ErrorCode.SOURCE_OPEN_FAILED
