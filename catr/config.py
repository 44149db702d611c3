from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
import os
import yaml

from catr.domain.exceptions import ConfigError
from catr.infra.logging.setup import map_log_level


@dataclass(frozen=True)
class Settings:
    # Input
    encoding: str = "utf-8"

    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


SETTING_KEYS = ("encoding", "log_level", "log_dir")


def _read_yaml_config(path: Path) -> dict:
    if not path.exists() or not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    unknown = sorted(set(data) - set(SETTING_KEYS))
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(map(str, unknown))}")
    return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def _validate(settings: Settings) -> None:
    try:
        codecs.lookup(settings.encoding)
    except LookupError as exc:
        raise ConfigError(f"Unknown encoding: {settings.encoding}") from exc
    try:
        map_log_level(settings.log_level)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def load_settings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    # 2) env
    env = {
        "encoding": _env_get("CATR_ENCODING"),
        "log_level": _env_get("CATR_LOG_LEVEL"),
        "log_dir": _env_get("CATR_LOG_DIR"),
    }
    if any(v is not None for v in env.values()):
        sources.append("env")

    merged = {key: cfg.get(key, getattr(defaults, key)) for key in SETTING_KEYS}

    for key, value in env.items():
        if value is not None:
            merged[key] = value

    # 3) CLI overrides (only those explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")

    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    settings = Settings(
        encoding=str(merged["encoding"]),
        log_level=str(merged["log_level"]).upper(),
        log_dir=str(merged["log_dir"]) if merged["log_dir"] else None,
    )
    _validate(settings)

    return LoadedSettings(settings=settings, sources_used=sources)
