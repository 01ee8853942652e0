from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_MODEL, ImputationConfig, PipelineConfig
from ..models.metal_standards import resolve_weights
from ..models.standard_fields import StandardField, mapping_from_raw

"""Config loader.

Responsibilities:
- Load YAML config (config/aquavaluate.yml by default)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults and convert to the typed PipelineConfig
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/aquavaluate.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing / unreadable, or the config violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> PipelineConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    # ヘッダは読み込み時に小文字化されるので mapping 側も合わせる
    raw_mapping = {k: v.lower() for k, v in (data.get("mapping") or {}).items()}
    imp_raw = data.get("imputation") or {}
    imputation = ImputationConfig(
        enabled=imp_raw.get("enabled", False),
        model=imp_raw.get("model", DEFAULT_MODEL),
        location_context=imp_raw.get("location_context"),
    )
    weights_raw = data.get("weights")
    # 指定されていない金属はデフォルトの重みのまま
    weights = (
        resolve_weights({StandardField(k): float(v) for k, v in weights_raw.items()})
        if weights_raw
        else None
    )
    return PipelineConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", "./output"),
        mapping=mapping_from_raw(raw_mapping),
        suggest_mapping=data.get("suggest_mapping", False),
        imputation=imputation,
        export_formats=tuple(data.get("export_formats", ("csv", "json"))),
        weights=weights,
    )
