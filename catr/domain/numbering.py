from __future__ import annotations

from catr.domain.models import NumberingMode

NUMBER_WIDTH = 6


def format_numbered(number: int, text: str) -> str:
    """
    Назначение:
        Строка с номером: номер выровнен вправо в поле из 6 символов, затем TAB и текст.
    """
    return f"{number:>{NUMBER_WIDTH}}\t{text}"


class LineNumberer:
    """
    Назначение/ответственность:
        Форматирует строки одного источника согласно NumberingMode.
    Инварианты/гарантии:
        - Счётчики живут ровно один источник; для следующего создаётся новый экземпляр.
        - line_index считает все строки, nonblank_count только непустые.
    """

    def __init__(self, mode: NumberingMode) -> None:
        self.mode = mode
        self.line_index = 0
        self.nonblank_count = 0

    def format(self, text: str) -> str:
        """
        Назначение:
            Возвращает строку вывода без завершающего перевода строки.

        Поведение:
            - NUMBER_ALL: нумеруются все строки, включая пустые.
            - NUMBER_NONBLANK: пустая строка остаётся пустой (без номера и TAB).
            - PLAIN: текст без изменений.
        """
        self.line_index += 1

        if self.mode is NumberingMode.NUMBER_ALL:
            return format_numbered(self.line_index, text)

        if self.mode is NumberingMode.NUMBER_NONBLANK:
            if not text:
                return ""
            self.nonblank_count += 1
            return format_numbered(self.nonblank_count, text)

        return text


__all__ = ["NUMBER_WIDTH", "format_numbered", "LineNumberer"]
