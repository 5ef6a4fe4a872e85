"""
config — Loads tagtranslit.yaml with env var overrides.

Precedence: env vars > tagtranslit.yaml > defaults
"""
from __future__ import annotations
import os
from pathlib import Path
from dataclasses import dataclass
import yaml

from .errors import ConfigError
from .translit.mapping import DEFAULT_MAP_NAME
from .translit.recovery import (
    DEST_CODEPAGE, PLACEHOLDER, PLACEHOLDER_THRESHOLD, SOURCE_CODEPAGE, RecoverySettings,
)


@dataclass
class Config:
    # Mapping definition used when --map is omitted
    default_map: str = DEFAULT_MAP_NAME

    # Encoding recovery
    source_codepage: str = SOURCE_CODEPAGE  # how the mojibake was decoded
    dest_codepage: str = DEST_CODEPAGE      # what the bytes really were
    placeholder: str = PLACEHOLDER
    placeholder_threshold: float = PLACEHOLDER_THRESHOLD

    log_level: str = "WARNING"

    def recovery_settings(self) -> RecoverySettings:
        return RecoverySettings(
            source_codepage=self.source_codepage,
            dest_codepage=self.dest_codepage,
            placeholder=self.placeholder,
            threshold=self.placeholder_threshold,
        )


ENV_MAP = {
    "TAGTRANSLIT_MAP": "default_map",
    "TAGTRANSLIT_SOURCE_CODEPAGE": "source_codepage",
    "TAGTRANSLIT_DEST_CODEPAGE": "dest_codepage",
    "TAGTRANSLIT_PLACEHOLDER": "placeholder",
    "TAGTRANSLIT_THRESHOLD": "placeholder_threshold",
    "TAGTRANSLIT_LOG_LEVEL": "log_level",
}


def _coerce(cfg: Config, attr: str, value, origin: str):
    field_type = type(getattr(cfg, attr))
    try:
        return field_type(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{origin}: invalid value for {attr}: {value!r}") from e


def load_config(config_path: str | Path | None = None) -> Config:
    """Load config from YAML file, then override with env vars."""
    cfg = Config()

    # 1. Load from YAML if available
    explicit = config_path is not None or "TAGTRANSLIT_CONFIG" in os.environ
    if config_path is None:
        config_path = os.environ.get("TAGTRANSLIT_CONFIG", "tagtranslit.yaml")
    path = Path(config_path)
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"cannot read config '{path}': {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"config '{path}' must be a mapping")
        for key, value in data.items():
            key_norm = str(key).replace("-", "_")
            if hasattr(cfg, key_norm) and value is not None:
                setattr(cfg, key_norm, _coerce(cfg, key_norm, value, str(path)))
    elif explicit:
        raise ConfigError(f"config file '{path}' not found")

    # 2. Override with env vars (TAGTRANSLIT_ prefix)
    for env_key, attr in ENV_MAP.items():
        val = os.environ.get(env_key)
        if val is not None:
            setattr(cfg, attr, _coerce(cfg, attr, val, env_key))

    return cfg
