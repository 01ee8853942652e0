from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..ai.imputation import GeminiImputer, Imputer
from ..ai.mapping_suggestion import suggest_column_mapping
from ..ingest.reader import CsvReadError, read_csv_table
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import PipelineConfig
from ..models.processing_result import BatchResult, FileStat
from ..models.records import PollutionLevel
from ..models.standard_fields import METRIC_FIELDS, ColumnMapping, StandardField
from .export import write_exports
from .pipeline import process_with_ai, process_without_ai
from .progress import ProgressTracker
from .summary import summarize

"""Batch orchestration over a directory of CSV files.

process_all() scans the configured directory and, for each file: reads it,
resolves and checks the column mapping, runs the pipeline (AI path or direct
path), writes exports, and aggregates per-file stats. A failing file is recorded in
the error log and the run continues with the next one.
"""

__all__ = [
    "ProcessingError",
    "Suggester",
    "scan_csv_files",
    "resolve_mapping",
    "check_mapping",
    "REQUIRED_FIELDS",
    "process_all",
]

logger = logging.getLogger(__name__)

Suggester = Callable[..., ColumnMapping]

REQUIRED_FIELDS = (StandardField.LATITUDE, StandardField.LONGITUDE)


class ProcessingError(Exception):
    """Fatal batch error (e.g. unreadable source directory)."""


def scan_csv_files(directory: Path) -> list[Path]:
    """Scan directory for .csv files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def resolve_mapping(
    config: PipelineConfig,
    headers: Sequence[str],
    suggester: Suggester | None = None,
) -> ColumnMapping:
    """Configured mapping if any; otherwise the AI suggestion when enabled.

    Configured headers missing from this file are only reported (debug); the
    column mapper skips them anyway.
    """
    if config.mapping:
        missing = sorted(h for h in config.mapping.values() if h not in headers)
        if missing:
            logger.debug("configured headers not in file: %s", missing)
        return dict(config.mapping)
    if config.suggest_mapping:
        suggester = suggester or suggest_column_mapping
        mapping = suggester(list(headers), model=config.imputation.model)
        if mapping:
            logger.info(
                "suggested mapping: %s",
                ", ".join(f"{f.value}={h}" for f, h in mapping.items()),
            )
            return mapping
        logger.warning("no mapping suggestion available")
    return {}


def check_mapping(mapping: ColumnMapping, headers: Sequence[str]) -> str | None:
    """Return why ``mapping`` cannot score this file, or None when it can.

    Latitude and longitude must map to columns of the file (samples have to be
    placeable on a map), and at least one metal column must be mapped.
    """
    missing = [f.value for f in REQUIRED_FIELDS if mapping.get(f) not in headers]
    if missing:
        return f"required fields not mapped to a column: {', '.join(missing)}"
    if not any(mapping.get(f) in headers for f in METRIC_FIELDS):
        return "no metal concentration column mapped"
    return None


def _empty_counts() -> dict[PollutionLevel, int]:
    return {level: 0 for level in PollutionLevel}


def process_all(
    config: PipelineConfig,
    *,
    use_ai: bool = False,
    imputer: Imputer | None = None,
    suggester: Suggester | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> BatchResult:
    """Process every CSV file in ``config.source_directory``.

    Args:
        config: loaded pipeline configuration
        use_ai: run the imputation path (also enabled by config.imputation.enabled)
        imputer: imputation collaborator; a GeminiImputer is created when needed
        suggester: mapping suggestion collaborator (default: suggest_column_mapping)
        error_log: buffer for failed files; flushed once at the end

    Raises:
        ProcessingError: source directory missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    use_ai = use_ai or config.imputation.enabled
    if use_ai and imputer is None:
        imputer = GeminiImputer(config.imputation.model)

    file_paths = scan_csv_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_samples = 0
    imputed_cells = 0
    counts = _empty_counts()

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            stat = _process_single_file(
                file_path, config, imputer if use_ai else None, suggester, error_log
            )
            file_stats.append(stat)
            if stat.status == "success":
                success_count += 1
                total_samples += stat.samples
                imputed_cells += stat.imputed_cells
                for level, n in (stat.pollution_counts or {}).items():
                    counts[level] += n
            else:
                failed_count += 1
            progress.finish_file(success=success_count, failed=failed_count, samples=total_samples)

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning("failed to write error log: %s", e)
    else:
        if log_path is not None:
            logger.info("error log written: %s", log_path)

    end_time = datetime.now(UTC)
    return BatchResult(
        success_files=success_count,
        failed_files=failed_count,
        total_samples=total_samples,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        pollution_counts=counts,
        imputed_cells=imputed_cells,
        file_stats=file_stats,
    )


def _failed(file_path: Path, started: datetime, error: str) -> FileStat:
    return FileStat(
        file_name=file_path.name,
        status="failed",
        samples=0,
        elapsed_seconds=(datetime.now(UTC) - started).total_seconds(),
        error=error,
    )


def _process_single_file(
    file_path: Path,
    config: PipelineConfig,
    imputer: Imputer | None,
    suggester: Suggester | None,
    error_log: ErrorLogBuffer,
) -> FileStat:
    """Read, map, score and export one CSV file. Never raises."""
    started = datetime.now(UTC)
    try:
        table = read_csv_table(file_path)
    except CsvReadError as e:
        logger.error("file=%s %s", file_path.name, e)
        error_log.record(file_path.name, "INPUT_VALIDATION_ERROR", str(e))
        return _failed(file_path, started, str(e))

    headers = [str(h) for h in table[0]]
    mapping = resolve_mapping(config, headers, suggester)
    problem = check_mapping(mapping, headers)
    if problem is not None:
        logger.error("file=%s %s", file_path.name, problem)
        error_log.record(file_path.name, "MAPPING_ERROR", problem)
        return _failed(file_path, started, problem)

    if imputer is not None:
        result = process_with_ai(
            table,
            mapping,
            imputer,
            location_context=config.imputation.location_context,
            weights=config.weights,
        )
    else:
        result = process_without_ai(table, mapping, weights=config.weights)

    if not result.ok:
        error = result.error or "unknown error"
        error_log.record(file_path.name, result.error_type or "PROCESSING_ERROR", error)
        return _failed(file_path, started, error)

    records = result.records or []
    try:
        written = write_exports(
            records, Path(config.output_directory), file_path.stem, config.export_formats
        )
    except (OSError, ValueError) as e:
        logger.error("file=%s export failed: %s", file_path.name, e)
        error_log.record(file_path.name, "EXPORT_ERROR", str(e))
        return _failed(file_path, started, str(e))

    summary = summarize(records)
    logger.info(
        "file=%s samples=%d avg_hmpi=%.2f max_hmpi=%.2f high=%d imputed_cells=%d exports=%s",
        file_path.name,
        summary.total_samples,
        summary.average_hmpi,
        summary.max_hmpi,
        summary.pollution_counts[PollutionLevel.HIGH],
        summary.imputed_cells,
        ",".join(p.name for p in written),
    )
    return FileStat(
        file_name=file_path.name,
        status="success",
        samples=summary.total_samples,
        elapsed_seconds=(datetime.now(UTC) - started).total_seconds(),
        imputed_cells=summary.imputed_cells,
        pollution_counts=dict(summary.pollution_counts),
    )
