from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Union

"""Standard field registry for groundwater sample data.

Defines the closed set of canonical field keys every uploaded CSV is mapped onto,
their display labels, and the split between descriptive fields (location / date)
and metric fields (metal concentrations that take part in HMPI scoring).
"""

__all__ = [
    "Cell",
    "RawTable",
    "StandardField",
    "ColumnMapping",
    "METRIC_FIELDS",
    "DESCRIPTIVE_FIELDS",
    "mapping_from_raw",
]

# A raw cell as it comes out of the CSV reader or a caller-built table
Cell = Union[str, int, float]
# Row 0 = header row (lowercased), rows 1.. = body. Rows may be shorter than the header.
RawTable = list[list[Cell]]


class StandardField(Enum):
    """Canonical sample fields.

    Member order is the display / export order.
    """
    LOCATION_NAME = "location_name"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    DATE = "date"
    ARSENIC = "arsenic"
    CADMIUM = "cadmium"
    CHROMIUM = "chromium"
    COPPER = "copper"
    MERCURY = "mercury"
    LEAD = "lead"
    ZINC = "zinc"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_metric(self) -> bool:
        return self in METRIC_FIELDS


_LABELS: dict[StandardField, str] = {
    StandardField.LOCATION_NAME: "Location Name",
    StandardField.LATITUDE: "Latitude",
    StandardField.LONGITUDE: "Longitude",
    StandardField.DATE: "Date",
    StandardField.ARSENIC: "Arsenic (As)",
    StandardField.CADMIUM: "Cadmium (Cd)",
    StandardField.CHROMIUM: "Chromium (Cr)",
    StandardField.COPPER: "Copper (Cu)",
    StandardField.MERCURY: "Mercury (Hg)",
    StandardField.LEAD: "Lead (Pb)",
    StandardField.ZINC: "Zinc (Zn)",
}

DESCRIPTIVE_FIELDS: tuple[StandardField, ...] = (
    StandardField.LOCATION_NAME,
    StandardField.LATITUDE,
    StandardField.LONGITUDE,
    StandardField.DATE,
)

METRIC_FIELDS: tuple[StandardField, ...] = (
    StandardField.ARSENIC,
    StandardField.CADMIUM,
    StandardField.CHROMIUM,
    StandardField.COPPER,
    StandardField.MERCURY,
    StandardField.LEAD,
    StandardField.ZINC,
)

# Partial mapping: standard field -> source CSV header. Missing key = not mapped.
ColumnMapping = dict[StandardField, str]


def mapping_from_raw(raw: Mapping[str, object] | None) -> ColumnMapping:
    """Build a ColumnMapping from a plain ``{"arsenic": "as", ...}`` dict.

    Unknown field names and empty / non-string headers are dropped, so the
    result only ever holds usable entries. Used for YAML config and for
    suggestion-service output, both of which arrive keyed by plain strings.
    """
    mapping: ColumnMapping = {}
    if not raw:
        return mapping
    for key, header in raw.items():
        try:
            field = StandardField(key)
        except ValueError:
            continue
        if isinstance(header, str) and header:
            mapping[field] = header
    return mapping
