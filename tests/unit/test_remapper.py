from __future__ import annotations

from aquavaluate.codec.csv_codec import parse_annotated
from aquavaluate.models.records import HeaderRecord, PollutionLevel
from aquavaluate.models.standard_fields import StandardField
from aquavaluate.services.remapper import reconcile, reprocess


def test_reconcile_moves_flags_onto_standard_fields():
    parsed = [
        HeaderRecord(
            id=0,
            values={"site": "W1", "as": 0.02, "pb": 0.01, "ph": 7.1},
            imputed={"site": False, "as": True, "pb": False, "ph": False},
        )
    ]
    mapping = {StandardField.LOCATION_NAME: "site", StandardField.ARSENIC: "as", StandardField.LEAD: "pb"}
    (rec,) = reconcile(parsed, mapping)
    assert rec.id == 0
    assert rec.values == {StandardField.LOCATION_NAME: "W1", StandardField.ARSENIC: 0.02, StandardField.LEAD: 0.01}
    # False フラグは持ち込まない
    assert rec.imputed == {StandardField.ARSENIC: True}


def test_reconcile_skips_headers_missing_from_row():
    parsed = parse_annotated("as,pb\n0.01\n")
    (rec,) = reconcile(parsed, {StandardField.ARSENIC: "as", StandardField.LEAD: "pb", StandardField.ZINC: "zn"})
    assert rec.values == {StandardField.ARSENIC: 0.01}
    assert rec.imputed == {}


def test_reconcile_ignores_empty_mapping_entries():
    parsed = parse_annotated("as\n0.01\n")
    (rec,) = reconcile(parsed, {StandardField.ARSENIC: ""})
    assert rec.values == {}


def test_reprocess_scores_reconciled_records():
    parsed = parse_annotated("site,as,pb\nW1,0.02*,0.02\nW2,0.001,0.001*\n")
    mapping = {StandardField.LOCATION_NAME: "site", StandardField.ARSENIC: "as", StandardField.LEAD: "pb"}
    first, second = reprocess(parsed, mapping)
    assert (first.hmpi, first.pollution_level) == ("2.00", PollutionLevel.HIGH)
    assert first.imputed == {StandardField.ARSENIC: True}
    assert (second.hmpi, second.pollution_level) == ("0.10", PollutionLevel.LOW)
    assert second.imputed == {StandardField.LEAD: True}
    assert [r.id for r in (first, second)] == [0, 1]


def test_reprocess_with_changed_mapping_rescores():
    parsed = parse_annotated("a,b\n0.01,0.03\n")
    (as_a,) = reprocess(parsed, {StandardField.ARSENIC: "a"})
    (as_b,) = reprocess(parsed, {StandardField.ARSENIC: "b"})
    assert as_a.hmpi == "1.00"
    assert as_b.hmpi == "3.00"


def test_imputed_nan_drops_out_of_score():
    parsed = parse_annotated("as,pb\n*,0.01\n")
    (rec,) = reprocess(parsed, {StandardField.ARSENIC: "as", StandardField.LEAD: "pb"})
    assert rec.is_imputed(StandardField.ARSENIC)
    assert rec.hmpi == "1.00"


def test_reprocess_weights():
    parsed = parse_annotated("as,pb\n0.01,0.03\n")
    mapping = {StandardField.ARSENIC: "as", StandardField.LEAD: "pb"}
    (rec,) = reprocess(parsed, mapping, {StandardField.ARSENIC: 3, StandardField.LEAD: 1})
    assert rec.hmpi == "1.50"


def test_unmapped_columns_dropped_on_partial_imputation():
    parsed = parse_annotated("Temp,As\n25,0.02*\n")
    (rec,) = reconcile(parsed, {StandardField.ARSENIC: "As"})
    assert rec.values == {StandardField.ARSENIC: 0.02}
    assert rec.imputed == {StandardField.ARSENIC: True}
