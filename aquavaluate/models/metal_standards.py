from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .standard_fields import METRIC_FIELDS, StandardField

"""Safety thresholds and relative weights used for HMPI scoring.

Standards are WHO drinking-water guideline values in mg/L. All weights are 1 at
the moment, which makes HMPI the plain mean of concentration/standard ratios,
but weights stay a separate table so they can be tuned per deployment
(see ``weights`` in the YAML config).
"""

__all__ = [
    "METAL_STANDARDS",
    "METAL_WEIGHTS",
    "resolve_weights",
]

METAL_STANDARDS: Mapping[StandardField, float] = MappingProxyType({
    StandardField.ARSENIC: 0.01,
    StandardField.CADMIUM: 0.003,
    StandardField.CHROMIUM: 0.05,
    StandardField.COPPER: 2.0,
    StandardField.MERCURY: 0.006,
    StandardField.LEAD: 0.01,
    StandardField.ZINC: 5.0,
})

METAL_WEIGHTS: Mapping[StandardField, float] = MappingProxyType({
    StandardField.ARSENIC: 1,
    StandardField.CADMIUM: 1,
    StandardField.CHROMIUM: 1,
    StandardField.COPPER: 1,
    StandardField.MERCURY: 1,
    StandardField.LEAD: 1,
    StandardField.ZINC: 1,
})


def resolve_weights(overrides: Mapping[StandardField, float] | None = None) -> dict[StandardField, float]:
    """Return the full weight table with ``overrides`` applied on top of the defaults.

    Raises:
        ValueError: override targets a descriptive field or is not strictly positive
    """
    weights = dict(METAL_WEIGHTS)
    if not overrides:
        return weights
    for field, weight in overrides.items():
        if field not in METRIC_FIELDS:
            raise ValueError(f"weight override for non-metric field: {field.value}")
        if weight <= 0:
            raise ValueError(f"weight for {field.value} must be > 0 (got {weight})")
        weights[field] = float(weight)
    return weights
