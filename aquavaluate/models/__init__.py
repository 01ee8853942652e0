"""Domain models for the AquaValuate groundwater HMPI pipeline.

This package contains all domain model classes used throughout the application:
the standard field registry, metal standards, pipeline records, configuration
and result models.
"""

from .config_models import ImputationConfig, PipelineConfig
from .error_record import ErrorRecord
from .imputation import ImputationResult, Imputer
from .metal_standards import METAL_STANDARDS, METAL_WEIGHTS, resolve_weights
from .processing_result import BatchResult, FileStat, PipelineResult, ResultsSummary
from .records import CanonicalRecord, HeaderRecord, PollutionLevel
from .standard_fields import (
    DESCRIPTIVE_FIELDS,
    METRIC_FIELDS,
    Cell,
    ColumnMapping,
    RawTable,
    StandardField,
    mapping_from_raw,
)

__all__ = [
    # Schema registry
    "StandardField",
    "ColumnMapping",
    "Cell",
    "RawTable",
    "METRIC_FIELDS",
    "DESCRIPTIVE_FIELDS",
    "mapping_from_raw",
    "METAL_STANDARDS",
    "METAL_WEIGHTS",
    "resolve_weights",
    # Records
    "PollutionLevel",
    "HeaderRecord",
    "CanonicalRecord",
    # Imputation contract
    "ImputationResult",
    "Imputer",
    # Configuration models
    "ImputationConfig",
    "PipelineConfig",
    # Result models
    "PipelineResult",
    "ResultsSummary",
    "FileStat",
    "BatchResult",
    "ErrorRecord",
]
