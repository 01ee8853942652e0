from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..codec.csv_codec import parse_annotated, serialize
from ..models.imputation import Imputer
from ..models.processing_result import PipelineResult
from ..models.records import CanonicalRecord
from ..models.standard_fields import Cell, ColumnMapping, StandardField
from .column_mapper import project
from .remapper import reprocess
from .scoring import score

"""End-to-end pipeline operations for one in-memory table.

Two entry points, both returning a PipelineResult:

- process_without_ai: RawTable -> column mapper -> scoring
- process_with_ai:    RawTable -> serialize -> imputer -> parse_annotated
                      -> reconcile (mapping + imputed flags) -> scoring

Fatal conditions abort the run and come back as ``PipelineResult.error``;
nothing here raises to the caller and no partial record set is returned.
"""

__all__ = [
    "PipelineError",
    "ImputationFailedError",
    "RecordCountMismatchError",
    "impute_and_score",
    "process_with_ai",
    "process_without_ai",
]

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Base exception for pipeline-fatal conditions."""
    error_type = "PROCESSING_ERROR"


class ImputationFailedError(PipelineError):
    """Imputation call raised, or returned no usable CSV text."""
    error_type = "IMPUTATION_ERROR"


class RecordCountMismatchError(PipelineError):
    """Imputed table row count differs from the uploaded table."""
    error_type = "RECORD_COUNT_MISMATCH"

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"record count mismatch: uploaded table has {expected} rows, imputed data has {actual}"
        )
        self.expected = expected
        self.actual = actual


def _body_row_count(table: Sequence[Sequence[Cell]]) -> int:
    return max(len(table) - 1, 0)


def impute_and_score(
    table: Sequence[Sequence[Cell]],
    mapping: ColumnMapping,
    imputer: Imputer,
    *,
    location_context: str | None = None,
    weights: Mapping[StandardField, float] | None = None,
) -> list[CanonicalRecord]:
    """Run the AI path, raising PipelineError subclasses on fatal conditions."""
    csv_text = serialize(table)
    try:
        result = imputer(csv_text, location_context)
    except Exception as e:
        raise ImputationFailedError(f"AI imputation failed: {e}") from e

    imputed_text = getattr(result, "imputed_data", None)
    if not isinstance(imputed_text, str) or not imputed_text.strip():
        raise ImputationFailedError("AI imputation failed to return data.")

    parsed = parse_annotated(imputed_text)
    expected = _body_row_count(table)
    if len(parsed) != expected:
        raise RecordCountMismatchError(expected, len(parsed))

    imputed_cells = sum(sum(1 for flag in r.imputed.values() if flag) for r in parsed)
    logger.debug("imputation parsed rows=%d imputed_cells=%d", len(parsed), imputed_cells)
    return reprocess(parsed, mapping, weights)


def process_with_ai(
    table: Sequence[Sequence[Cell]],
    mapping: ColumnMapping,
    imputer: Imputer,
    *,
    location_context: str | None = None,
    weights: Mapping[StandardField, float] | None = None,
) -> PipelineResult:
    """AI path: impute missing values, remap onto standard fields and score."""
    try:
        records = impute_and_score(
            table, mapping, imputer, location_context=location_context, weights=weights
        )
    except PipelineError as e:
        logger.error("processing(ai): %s", e)
        return PipelineResult(error=str(e), error_type=e.error_type, used_ai=True)
    except Exception as e:
        logger.error("processing(ai): unexpected error: %s", e)
        return PipelineResult(
            error=str(e) or "An unknown error occurred during AI processing.",
            error_type="UNEXPECTED_ERROR",
            used_ai=True,
        )
    return PipelineResult(records=records, used_ai=True)


def process_without_ai(
    table: Sequence[Sequence[Cell]],
    mapping: ColumnMapping,
    *,
    weights: Mapping[StandardField, float] | None = None,
) -> PipelineResult:
    """Direct path: project raw rows through ``mapping`` and score them."""
    try:
        records = score(project(table, mapping), weights)
    except Exception as e:
        logger.error("processing: unexpected error: %s", e)
        return PipelineResult(
            error=str(e) or "An unknown error occurred during data processing.",
            error_type="UNEXPECTED_ERROR",
        )
    return PipelineResult(records=records)
