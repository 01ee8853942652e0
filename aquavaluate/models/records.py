from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .standard_fields import Cell, StandardField

"""Record models flowing through the HMPI pipeline.

- HeaderRecord: one row of AI-imputed CSV, still keyed by the raw header strings
- CanonicalRecord: one sample keyed by StandardField, optionally scored

Both keep the imputation audit as a separate flag map instead of sibling
``<key>_isImputed`` entries; those sibling keys only appear on export.
"""

__all__ = [
    "PollutionLevel",
    "HeaderRecord",
    "CanonicalRecord",
]


class PollutionLevel(Enum):
    """Severity tier derived from HMPI.

    - LOW: hmpi < 1
    - MEDIUM: 1 <= hmpi < 2
    - HIGH: hmpi >= 2
    """
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class HeaderRecord:
    """Row parsed from annotated CSV text, keyed by header exactly as written.

    ``imputed`` holds an entry (True/False) for every cell that was present in
    the row, so ``imputed.keys() == values.keys()``.
    """
    id: int  # 0-based data row index (header excluded)
    values: dict[str, Cell] = field(default_factory=dict)
    imputed: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class CanonicalRecord:
    """Per-sample record normalized to standard fields.

    Scoring never removes fields; it returns a copy with ``hmpi`` and
    ``pollution_level`` filled in.
    """
    id: int  # 0-based body row index, stable across pipeline stages
    values: dict[StandardField, Cell] = field(default_factory=dict)
    # Only True flags are stored. Absent key = not imputed.
    imputed: dict[StandardField, bool] = field(default_factory=dict)
    hmpi: str | None = None  # fixed 2-decimal string, e.g. "1.37"
    pollution_level: PollutionLevel | None = None

    def get(self, key: StandardField, default: Cell | None = None) -> Cell | None:
        return self.values.get(key, default)

    def is_imputed(self, key: StandardField) -> bool:
        return self.imputed.get(key, False)

    @property
    def is_scored(self) -> bool:
        return self.hmpi is not None and self.pollution_level is not None

    @property
    def imputed_fields(self) -> list[StandardField]:
        return [f for f in StandardField if self.imputed.get(f, False)]
