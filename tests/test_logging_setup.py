import logging

import pytest

from catr.infra.logging.setup import (
    close_command_logger,
    create_command_logger,
    log_event,
    map_log_level,
)


def test_map_log_level():
    assert map_log_level("error") == logging.ERROR
    assert map_log_level("WARN") == logging.WARNING
    assert map_log_level(" info ") == logging.INFO
    assert map_log_level("DEBUG") == logging.DEBUG
    with pytest.raises(ValueError):
        map_log_level("TRACE")


def test_logger_without_dir_is_silent(capsys):
    logger, logFilePath = create_command_logger("cat", None, "run-x", "DEBUG")
    log_event(logger, logging.ERROR, "run-x", "core", "should not leak")
    close_command_logger(logger)
    assert logFilePath is None
    assert logger.propagate is False
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_logger_writes_file_with_fields(tmp_path):
    logger, logFilePath = create_command_logger("cat", str(tmp_path / "logs"), "run-y", "INFO")
    log_event(logger, logging.INFO, "run-y", "source", "Opened a.txt")
    logger.info("plain message")
    log_event(logger, logging.DEBUG, "run-y", "source", "hidden")
    close_command_logger(logger)

    lines = (tmp_path / "logs" / "cat_run-y.log").read_text(encoding="utf-8").splitlines()
    assert logFilePath.endswith("cat_run-y.log")
    assert len(lines) == 2
    assert "INFO runId=run-y comp=source msg=Opened a.txt" in lines[0]
    assert "comp=core msg=plain message" in lines[1]


def test_run_id_is_time_prefixed_and_unique():
    from datetime import datetime, timezone

    from catr.common.run_id import generate_run_id

    moment = datetime(2026, 10, 19, 12, 30, 5, tzinfo=timezone.utc)
    first = generate_run_id(moment)
    second = generate_run_id(moment)
    assert first.startswith("20261019T123005Z-")
    assert len(first.split("-")[1]) == 8
    assert first != second
