from __future__ import annotations

import json
import math
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.records import CanonicalRecord
from ..models.standard_fields import StandardField

"""Export of scored records to CSV and JSON.

Flat layout, one object / row per record:
    id, <field>, <field>_isImputed, ..., hmpi, pollutionLevel

Imputed flags appear only where True (absent = not imputed), so JSON output is
lossless. CSV output is the union of all keys; cells a record does not have
are left empty.
"""

__all__ = [
    "EXPORT_FORMATS",
    "IMPUTED_SUFFIX",
    "record_to_dict",
    "records_to_frame",
    "records_to_csv",
    "records_to_json",
    "write_exports",
]

EXPORT_FORMATS = ("csv", "json")
IMPUTED_SUFFIX = "_isImputed"


def record_to_dict(record: CanonicalRecord) -> dict[str, Any]:
    row: dict[str, Any] = {"id": record.id}
    for field in StandardField:
        if field in record.values:
            row[field.value] = record.values[field]
        if record.imputed.get(field, False):
            row[f"{field.value}{IMPUTED_SUFFIX}"] = True
    if record.hmpi is not None:
        row["hmpi"] = record.hmpi
    if record.pollution_level is not None:
        row["pollutionLevel"] = record.pollution_level.value
    return row


def _column_order(rows: Iterable[dict[str, Any]]) -> list[str]:
    present: set[str] = set()
    for row in rows:
        present.update(row.keys())
    columns = ["id"]
    for field in StandardField:
        for key in (field.value, f"{field.value}{IMPUTED_SUFFIX}"):
            if key in present:
                columns.append(key)
    columns.extend(["hmpi", "pollutionLevel"])
    return columns


def records_to_frame(records: Sequence[CanonicalRecord]) -> pd.DataFrame:
    rows = [record_to_dict(r) for r in records]
    return pd.DataFrame(rows, columns=_column_order(rows))


def records_to_csv(records: Sequence[CanonicalRecord]) -> str:
    return records_to_frame(records).to_csv(index=False, lineterminator="\n")


def _json_safe(value: Any) -> Any:
    # NaN は JSON にできないので null
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def records_to_json(records: Sequence[CanonicalRecord]) -> str:
    payload = [{k: _json_safe(v) for k, v in record_to_dict(r).items()} for r in records]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def write_exports(
    records: Sequence[CanonicalRecord],
    output_dir: Path,
    stem: str,
    formats: Iterable[str] = EXPORT_FORMATS,
) -> list[Path]:
    """Write ``<stem>_results.<fmt>`` files into ``output_dir``.

    Raises:
        ValueError: unknown export format
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for fmt in formats:
        if fmt == "csv":
            content = records_to_csv(records)
        elif fmt == "json":
            content = records_to_json(records)
        else:
            raise ValueError(f"unsupported export format: {fmt}")
        path = output_dir / f"{stem}_results.{fmt}"
        path.write_text(content, encoding="utf-8")
        written.append(path)
    return written
