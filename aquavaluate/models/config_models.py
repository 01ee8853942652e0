from __future__ import annotations

from dataclasses import dataclass, field

from .standard_fields import ColumnMapping, StandardField

"""Config dataclasses for the AquaValuate pipeline.

These are the typed form of config/aquavaluate.yml after loading and schema
validation in aquavaluate.config.loader. Plain string keys from YAML are already
converted to StandardField here.
"""

__all__ = [
    "ImputationConfig",
    "PipelineConfig",
    "DEFAULT_MODEL",
]

DEFAULT_MODEL = "gemini-2.0-flash"


@dataclass(frozen=True)
class ImputationConfig:
    """Settings for the AI imputation collaborator.

    The API key is never stored here; it comes from the environment
    (GEMINI_API_KEY / GOOGLE_API_KEY, optionally via .env).
    """
    enabled: bool = False
    model: str = DEFAULT_MODEL
    location_context: str | None = None  # 補完プロンプトに渡す地域情報


@dataclass(frozen=True)
class PipelineConfig:
    """Root configuration object for a CLI run."""
    source_directory: str  # Directory to scan for CSV files
    output_directory: str = "./output"  # Export destination
    mapping: ColumnMapping = field(default_factory=dict)  # StandardField -> CSV header
    suggest_mapping: bool = False  # mapping が空のとき AI 提案を使う
    imputation: ImputationConfig = field(default_factory=ImputationConfig)
    export_formats: tuple[str, ...] = ("csv", "json")
    weights: dict[StandardField, float] | None = None  # full HMPI weight table (defaults + overrides)
