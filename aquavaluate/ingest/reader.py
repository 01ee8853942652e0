from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..models.standard_fields import Cell, RawTable

"""CSV reader: loads an uploaded sample file into a RawTable.

- Row 1 is the header row; headers are lowercased (mapping is done against
  lowercase names everywhere downstream).
- All cells are read as strings, exactly as written. Empty cells stay "" (no
  NaN conversion), blank lines are skipped.
- Short rows stay short: cells missing at the end of a row are absent, not "".
  Cells beyond the header width are dropped.

Input validation (file type, empty table) happens here, before the core pipeline.
"""

__all__ = [
    "CsvReadError",
    "InvalidFileTypeError",
    "EmptyTableError",
    "read_csv_table",
    "frame_to_table",
]

_READ_OPTIONS: dict[str, Any] = {
    "header": None,
    "dtype": str,
    "keep_default_na": False,
    "skip_blank_lines": True,
    "encoding": "utf-8-sig",
}


class CsvReadError(Exception):
    """Raised when a CSV file cannot be read into a table."""


class InvalidFileTypeError(CsvReadError):
    """Raised when the uploaded file is not a .csv file."""


class EmptyTableError(CsvReadError):
    """Raised when the file holds no header row."""


def frame_to_table(df: pd.DataFrame) -> RawTable:
    """Convert a header-less string DataFrame into a RawTable.

    With keep_default_na=False a written empty cell is "", so NaN only marks the
    padding pandas adds to short rows. Trailing padding is dropped.
    """
    rows: RawTable = []
    for raw in df.itertuples(index=False, name=None):
        cells: list[Cell] = list(raw)
        while cells and pd.isna(cells[-1]):
            cells.pop()
        rows.append(["" if pd.isna(c) else c for c in cells])
    if rows:
        rows[0] = [str(h).lower() for h in rows[0]]
    return rows


def read_csv_table(path: Path) -> RawTable:
    """Read ``path`` into a RawTable.

    Raises:
        InvalidFileTypeError: suffix is not .csv
        EmptyTableError: no rows at all
        CsvReadError: pandas could not parse the file
    """
    if path.suffix.lower() != ".csv":
        raise InvalidFileTypeError(f"not a CSV file: {path.name}")
    try:
        # 列数はヘッダ行で決まる。長い行は超過分を切り捨て
        width = len(pd.read_csv(path, nrows=1, **_READ_OPTIONS).columns)
        df = pd.read_csv(
            path,
            engine="python",
            on_bad_lines=lambda line: line[:width],
            **_READ_OPTIONS,
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyTableError(f"empty CSV file: {path.name}") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise CsvReadError(f"could not parse {path.name}: {e}") from e

    table = frame_to_table(df)
    if not table or not table[0]:
        raise EmptyTableError(f"empty CSV file: {path.name}")
    return table
