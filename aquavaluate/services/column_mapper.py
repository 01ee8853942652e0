from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.records import CanonicalRecord
from ..models.standard_fields import Cell, ColumnMapping, StandardField

"""Column mapper: direct (non-AI) projection of raw rows onto standard fields.

Header row = table[0]; every later row becomes one CanonicalRecord with
id = its 0-based position in the body. Cell values are copied as-is (no
numeric conversion here; scoring parses what it needs).

Mapped headers that do not exist in the table are skipped silently so a partial
mapping still yields usable records.
"""

__all__ = [
    "project",
]

logger = logging.getLogger(__name__)


def _resolve_columns(headers: Sequence[Cell], mapping: ColumnMapping) -> dict[StandardField, int]:
    """StandardField -> column index for every mapped header present in ``headers``."""
    columns: dict[StandardField, int] = {}
    header_list = [str(h) for h in headers]
    for field, header in mapping.items():
        if not header:
            continue
        try:
            columns[field] = header_list.index(header)
        except ValueError:
            logger.debug("mapped header not found field=%s header=%r", field.value, header)
    return columns


def project(table: Sequence[Sequence[Cell]], mapping: ColumnMapping) -> list[CanonicalRecord]:
    """Project raw body rows into CanonicalRecords using ``mapping``.

    Args:
        table: RawTable (row 0 = headers)
        mapping: StandardField -> source header

    Returns:
        One record per body row, in order. Unmapped fields, headers missing from
        the table, and cells beyond a short row's end are all absent from the record.
    """
    if not table:
        return []
    columns = _resolve_columns(table[0], mapping)
    records: list[CanonicalRecord] = []
    for row_index, row in enumerate(table[1:]):
        values: dict[StandardField, Cell] = {}
        for field, col in columns.items():
            if col < len(row):
                values[field] = row[col]
        records.append(CanonicalRecord(id=row_index, values=values))
    return records
