from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..models.processing_result import BatchResult, ResultsSummary
from ..models.records import CanonicalRecord, PollutionLevel

"""Summary statistics and SUMMARY line rendering.

summarize() computes the headline numbers shown for a scored record set
(sample count, average / min / max HMPI, count per pollution level).
render_summary_line() formats the final CLI line for a batch run.
"""

__all__ = [
    "summarize",
    "render_summary_line",
]


def summarize(records: Sequence[CanonicalRecord]) -> ResultsSummary:
    """Compute summary statistics over scored records.

    HMPI values are parsed back from their stored 2-decimal strings; unparseable
    or missing values are left out of average/min/max but the record still
    counts as a sample. Statistics are rounded to 2 decimals.
    """
    counts = {level: 0 for level in PollutionLevel}
    imputed_cells = 0
    for record in records:
        if record.pollution_level is not None:
            counts[record.pollution_level] += 1
        imputed_cells += len(record.imputed_fields)

    hmpis = pd.to_numeric(pd.Series([r.hmpi for r in records], dtype=object), errors="coerce").dropna()
    if hmpis.empty:
        return ResultsSummary(
            total_samples=len(records),
            average_hmpi=0.0,
            min_hmpi=0.0,
            max_hmpi=0.0,
            pollution_counts=counts,
            imputed_cells=imputed_cells,
        )
    return ResultsSummary(
        total_samples=len(records),
        average_hmpi=round(float(hmpis.mean()), 2),
        min_hmpi=round(float(hmpis.min()), 2),
        max_hmpi=round(float(hmpis.max()), 2),
        pollution_counts=counts,
        imputed_cells=imputed_cells,
    )


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip('0').rstrip('.')
    return f"{value:.3f}".rstrip('0').rstrip('.')


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line for a batch run.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed} samples={samples}
    low={low} medium={medium} high={high} imputed_cells={imputed} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = BatchResult(
        ...     success_files=1, failed_files=0, total_samples=12,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)  # doctest: +ELLIPSIS
        'SUMMARY files=1/1 success=1 failed=0 samples=12 low=0 medium=0 high=0 ...'
    """
    total = result.total_files
    counts = result.pollution_counts
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"samples={result.total_samples} "
        f"low={counts.get(PollutionLevel.LOW, 0)} "
        f"medium={counts.get(PollutionLevel.MEDIUM, 0)} "
        f"high={counts.get(PollutionLevel.HIGH, 0)} "
        f"imputed_cells={result.imputed_cells} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
