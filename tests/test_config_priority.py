import pytest

from catr.config import Settings, load_settings
from catr.domain.exceptions import ConfigError


def test_defaults():
    loaded = load_settings(config_path=None, cli_overrides={})
    assert loaded.settings == Settings()
    assert loaded.sources_used == []


def test_priority_cli_over_env_over_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yml"
    cfg.write_text(
        "\n".join([
            'encoding: "latin-1"',
            "log_level: DEBUG",
            'log_dir: "/cfg/logs"',
        ]),
        encoding="utf-8",
    )

    # ENV overrides config
    monkeypatch.setenv("CATR_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("CATR_LOG_DIR", "/env/logs")

    # CLI overrides env
    loaded = load_settings(
        config_path=str(cfg),
        cli_overrides={"encoding": None, "log_level": None, "log_dir": "/cli/logs"},
    )
    assert loaded.settings.encoding == "latin-1"
    assert loaded.settings.log_level == "ERROR"
    assert loaded.settings.log_dir == "/cli/logs"
    assert loaded.sources_used == ["config", "env", "cli"]


def test_empty_env_value_is_ignored(monkeypatch):
    monkeypatch.setenv("CATR_ENCODING", "  ")
    loaded = load_settings(config_path=None, cli_overrides={})
    assert loaded.settings.encoding == "utf-8"
    assert "env" not in loaded.sources_used


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(config_path=str(tmp_path / "nope.yml"), cli_overrides={})


def test_config_must_be_mapping(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(config_path=str(cfg), cli_overrides={})


def test_unknown_config_key(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("number: true\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="number"):
        load_settings(config_path=str(cfg), cli_overrides={})


def test_invalid_log_level():
    with pytest.raises(ConfigError, match="Unsupported log level"):
        load_settings(config_path=None, cli_overrides={"log_level": "LOUD"})


def test_cli_config_option(tmp_path):
    from typer.testing import CliRunner
    from catr.main import app

    cfg = tmp_path / "config.yml"
    cfg.write_text('encoding: "latin-1"\n', encoding="utf-8")
    data = tmp_path / "a.txt"
    data.write_bytes(b"\xe9\n")

    result = CliRunner().invoke(app, ["--config", str(cfg), str(data)])
    assert result.exit_code == 0
    assert result.stdout_bytes == b"\xe9\n"
