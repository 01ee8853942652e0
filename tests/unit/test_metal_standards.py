from __future__ import annotations

import pytest

from aquavaluate.models.metal_standards import METAL_STANDARDS, METAL_WEIGHTS, resolve_weights
from aquavaluate.models.standard_fields import StandardField


def test_standard_values():
    assert METAL_STANDARDS[StandardField.ARSENIC] == 0.01
    assert METAL_STANDARDS[StandardField.CADMIUM] == 0.003
    assert METAL_STANDARDS[StandardField.CHROMIUM] == 0.05
    assert METAL_STANDARDS[StandardField.COPPER] == 2.0
    assert METAL_STANDARDS[StandardField.MERCURY] == 0.006
    assert METAL_STANDARDS[StandardField.LEAD] == 0.01
    assert METAL_STANDARDS[StandardField.ZINC] == 5.0


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        METAL_STANDARDS[StandardField.ARSENIC] = 1.0  # type: ignore[index]


def test_resolve_weights_defaults():
    assert resolve_weights() == dict(METAL_WEIGHTS)
    assert resolve_weights(None) == dict(METAL_WEIGHTS)


def test_resolve_weights_override_keeps_other_defaults():
    weights = resolve_weights({StandardField.ARSENIC: 3})
    assert weights[StandardField.ARSENIC] == 3.0
    assert weights[StandardField.LEAD] == 1


def test_resolve_weights_rejects_descriptive_field():
    with pytest.raises(ValueError, match="non-metric"):
        resolve_weights({StandardField.LATITUDE: 2})


@pytest.mark.parametrize("weight", [0, -1.5])
def test_resolve_weights_rejects_non_positive(weight):
    with pytest.raises(ValueError, match="must be > 0"):
        resolve_weights({StandardField.ZINC: weight})
