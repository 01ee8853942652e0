from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping

from ..codec.csv_codec import parse_number
from ..models.metal_standards import METAL_STANDARDS, resolve_weights
from ..models.records import CanonicalRecord, PollutionLevel
from ..models.standard_fields import METRIC_FIELDS, StandardField

"""HMPI scoring engine.

HMPI = sum(w_i * C_i / S_i) / sum(w_i) over the metric fields whose value parses
as a non-negative number, where C_i is the measured concentration, S_i the
safety standard and w_i the weight. Metrics that are absent, non-numeric or
negative drop out of both sums; a record with no usable metric scores 0.

Severity: < 1 Low, [1, 2) Medium, >= 2 High.
"""

__all__ = [
    "LOW_UPPER_BOUND",
    "MEDIUM_UPPER_BOUND",
    "compute_hmpi",
    "classify",
    "format_hmpi",
    "score",
]

LOW_UPPER_BOUND = 1.0
MEDIUM_UPPER_BOUND = 2.0


def compute_hmpi(
    record: CanonicalRecord,
    weights: Mapping[StandardField, float] | None = None,
    standards: Mapping[StandardField, float] | None = None,
) -> float:
    """Weighted mean of concentration/standard ratios for one record.

    ``weights`` may name only some metrics; the rest keep their default weight.
    """
    weights = resolve_weights(weights)
    standards = METAL_STANDARDS if standards is None else standards
    weighted_sum = 0.0
    weight_total = 0.0
    for field in METRIC_FIELDS:
        concentration = parse_number(record.values.get(field))
        standard = standards.get(field)
        weight = weights.get(field)
        # 負の濃度は測定値として扱わない
        if concentration is None or concentration < 0 or standard is None or weight is None:
            continue
        weighted_sum += weight * (concentration / standard)
        weight_total += weight
    return weighted_sum / weight_total if weight_total > 0 else 0.0


def classify(hmpi: float) -> PollutionLevel:
    if hmpi < LOW_UPPER_BOUND:
        return PollutionLevel.LOW
    if hmpi < MEDIUM_UPPER_BOUND:
        return PollutionLevel.MEDIUM
    return PollutionLevel.HIGH


def format_hmpi(hmpi: float) -> str:
    # 表示・エクスポートとも小数2桁固定
    return f"{hmpi:.2f}"


def score(
    records: Iterable[CanonicalRecord],
    weights: Mapping[StandardField, float] | None = None,
) -> list[CanonicalRecord]:
    """Return copies of ``records`` with ``hmpi`` and ``pollution_level`` set.

    Pure: inputs are not modified, and scoring an already scored record again
    gives the same result since only metric values are read.
    """
    scored: list[CanonicalRecord] = []
    for record in records:
        hmpi = compute_hmpi(record, weights)
        scored.append(
            dataclasses.replace(
                record,
                values=dict(record.values),
                imputed=dict(record.imputed),
                hmpi=format_hmpi(hmpi),
                pollution_level=classify(hmpi),
            )
        )
    return scored
