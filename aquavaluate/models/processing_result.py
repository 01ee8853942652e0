from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .records import CanonicalRecord, PollutionLevel

"""Result models for pipeline runs and CLI batch runs.

- PipelineResult: outcome of one table run (records or an error description)
- ResultsSummary: headline statistics over scored records
- FileStat / BatchResult: per-file and aggregated CLI metrics for the SUMMARY line
"""

__all__ = [
    "PipelineResult",
    "ResultsSummary",
    "FileStat",
    "BatchResult",
]


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a single pipeline run.

    Exactly one of ``records`` / ``error`` is set. Fatal conditions (imputation
    failure, record count mismatch) come back as ``error`` instead of partial data.
    """
    records: list[CanonicalRecord] | None = None
    error: str | None = None
    error_type: str | None = None  # UPPER_SNAKE, same vocabulary as ErrorRecord
    used_ai: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.records is not None


@dataclass(frozen=True)
class ResultsSummary:
    """Headline statistics over a scored record set (summary view / SUMMARY line)."""
    total_samples: int
    average_hmpi: float
    min_hmpi: float
    max_hmpi: float
    pollution_counts: dict[PollutionLevel, int] = field(
        default_factory=lambda: {level: 0 for level in PollutionLevel}
    )
    imputed_cells: int = 0  # 監査用: AI 補完セル総数


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for BatchResult)."""
    file_name: str  # ファイル名
    status: str  # success/failed
    samples: int  # 成功時レコード数
    elapsed_seconds: float  # ファイル処理時間
    imputed_cells: int = 0
    pollution_counts: dict[PollutionLevel, int] | None = None
    error: str | None = None


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results of a CLI run over a directory of CSV files."""
    success_files: int  # 成功ファイル数
    failed_files: int  # 失敗ファイル数
    total_samples: int  # 総サンプル数
    start_time: datetime  # 全体開始
    end_time: datetime  # 全体終了
    elapsed_seconds: float  # end - start
    pollution_counts: dict[PollutionLevel, int] = field(
        default_factory=lambda: {level: 0 for level in PollutionLevel}
    )
    imputed_cells: int = 0
    file_stats: list[FileStat] | None = None  # ファイル詳細

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
