import pytest

from catr.domain.exceptions import ConfigError
from catr.domain.models import CatConfig, NumberingMode
from catr.domain.numbering import LineNumberer, format_numbered


def test_format_numbered_right_aligns_to_six():
    assert format_numbered(1, "hello") == "     1\thello"
    assert format_numbered(123456, "x") == "123456\tx"
    # шире поля: число не обрезается
    assert format_numbered(1234567, "x") == "1234567\tx"


def test_number_all_counts_blank_lines():
    numberer = LineNumberer(NumberingMode.NUMBER_ALL)
    out = [numberer.format(line) for line in ["hello", "", "world"]]
    assert out == ["     1\thello", "     2\t", "     3\tworld"]


def test_number_nonblank_skips_empty_lines():
    numberer = LineNumberer(NumberingMode.NUMBER_NONBLANK)
    out = [numberer.format(line) for line in ["hello", "", "world", ""]]
    assert out == ["     1\thello", "", "     2\tworld", ""]
    assert numberer.line_index == 4
    assert numberer.nonblank_count == 2


def test_whitespace_only_line_is_not_blank():
    numberer = LineNumberer(NumberingMode.NUMBER_NONBLANK)
    assert numberer.format(" ") == "     1\t "


def test_plain_is_verbatim():
    numberer = LineNumberer(NumberingMode.PLAIN)
    assert numberer.format("\tkeep  me ") == "\tkeep  me "
    assert numberer.format("") == ""


def test_mode_from_flags():
    assert NumberingMode.from_flags(False, False) is NumberingMode.PLAIN
    assert NumberingMode.from_flags(True, False) is NumberingMode.NUMBER_ALL
    assert NumberingMode.from_flags(False, True) is NumberingMode.NUMBER_NONBLANK
    with pytest.raises(ConfigError):
        NumberingMode.from_flags(True, True)


def test_config_defaults_to_stdin():
    config = CatConfig.create(None)
    assert config.sources == ("-",)
    assert config.mode is NumberingMode.PLAIN
    assert CatConfig.create([]).sources == ("-",)


def test_config_keeps_source_order_and_flags():
    config = CatConfig.create(["b.txt", "-", "a.txt"], number_nonblank_lines=True)
    assert config.sources == ("b.txt", "-", "a.txt")
    assert config.mode is NumberingMode.NUMBER_NONBLANK


def test_config_is_immutable():
    config = CatConfig.create(["a.txt"])
    with pytest.raises(AttributeError):
        config.sources = ("b.txt",)
