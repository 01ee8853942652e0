from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..models.records import CanonicalRecord, HeaderRecord
from ..models.standard_fields import Cell, ColumnMapping, StandardField
from .scoring import score

"""Mapping remapper for the AI path.

The imputation collaborator returns CSV keyed by the original headers. This
module applies the user's StandardField -> header mapping to those records and
moves each header's imputed flag onto the standard field it maps to.

Ids are positional and carried through unchanged; checking that the imputed
table has as many rows as the uploaded one is the caller's job
(see aquavaluate.services.pipeline).
"""

__all__ = [
    "reconcile",
    "reprocess",
]


def reconcile(parsed: Iterable[HeaderRecord], mapping: ColumnMapping) -> list[CanonicalRecord]:
    """Re-key header records onto standard fields.

    Headers not referenced by ``mapping`` are dropped. Only True flags are
    carried over; a header missing from a (short) parsed row leaves the field
    absent.
    """
    active = [(field, header) for field, header in mapping.items() if header]
    records: list[CanonicalRecord] = []
    for source in parsed:
        values: dict[StandardField, Cell] = {}
        imputed: dict[StandardField, bool] = {}
        for field, header in active:
            if header not in source.values:
                continue
            values[field] = source.values[header]
            if source.imputed.get(header, False):
                imputed[field] = True
        records.append(CanonicalRecord(id=source.id, values=values, imputed=imputed))
    return records


def reprocess(
    parsed: Iterable[HeaderRecord],
    mapping: ColumnMapping,
    weights: Mapping[StandardField, float] | None = None,
) -> list[CanonicalRecord]:
    """reconcile() followed by score(): the final step of the AI path."""
    return score(reconcile(parsed, mapping), weights)
