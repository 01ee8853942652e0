from __future__ import annotations

import math
import re
from collections.abc import Sequence

from ..models.records import HeaderRecord
from ..models.standard_fields import Cell

"""Plain-text CSV codec used around the AI imputation call.

- serialize(): RawTable -> CSV text sent to the imputation collaborator
- parse_annotated(): imputed CSV text -> HeaderRecord list with audit flags

Imputed cells come back with a trailing ``*`` (e.g. ``0.08*``). That marker is
the only contract with the collaborator; nothing else is interpreted.

Known limitation: no quoting / escaping on either side. A cell containing a
comma shifts every following cell of its row. Callers must not rely on
round-tripping such values.
"""

__all__ = [
    "IMPUTED_MARKER",
    "serialize",
    "parse_annotated",
    "parse_number",
]

IMPUTED_MARKER = "*"

# Decimal literal only: no "inf" / "nan" / "1_000" forms that float() would accept.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: object) -> float | None:
    """Parse ``value`` as a finite float, or return None.

    Numbers pass through (NaN / inf rejected). Strings are stripped and must be a
    plain decimal literal. Anything else (None, bool, other objects) is None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_RE.fullmatch(text):
            return None
        number = float(text)
    else:
        try:
            number = float(value)  # numpy scalars etc.
        except (TypeError, ValueError):
            return None
    return number if math.isfinite(number) else None


def _format_cell(cell: Cell | None) -> str:
    if cell is None:
        return ""
    if isinstance(cell, float) and math.isnan(cell):
        return ""
    return str(cell)


def serialize(table: Sequence[Sequence[Cell | None]]) -> str:
    """Join cells with ``,`` and rows with ``\\n``. No quoting is applied."""
    return "\n".join(",".join(_format_cell(c) for c in row) for row in table)


def _parse_cell(raw: str) -> tuple[Cell, bool]:
    if raw.endswith(IMPUTED_MARKER):
        number = parse_number(raw[: -len(IMPUTED_MARKER)])
        return (number if number is not None else math.nan), True
    number = parse_number(raw)
    return (number if number is not None else raw), False


def parse_annotated(text: str) -> list[HeaderRecord]:
    """Parse imputed CSV text into header-keyed records.

    The first line gives the headers (used verbatim). Each following non-blank
    line becomes one HeaderRecord whose id is its position among data lines.
    Rows shorter than the header simply leave the trailing headers unset.
    """
    lines = text.strip().splitlines()
    if not lines:
        return []
    headers = lines[0].split(",")
    records: list[HeaderRecord] = []
    for line in lines[1:]:
        if not line.strip():
            continue  # 空行はレコードにしない
        cells = line.split(",")
        values: dict[str, Cell] = {}
        imputed: dict[str, bool] = {}
        for header, raw in zip(headers, cells):
            value, was_imputed = _parse_cell(raw)
            values[header] = value
            imputed[header] = was_imputed
        records.append(HeaderRecord(id=len(records), values=values, imputed=imputed))
    return records
