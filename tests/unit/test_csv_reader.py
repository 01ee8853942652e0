from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from aquavaluate.ingest.reader import (
    CsvReadError,
    EmptyTableError,
    InvalidFileTypeError,
    frame_to_table,
    read_csv_table,
)
from aquavaluate.models.standard_fields import StandardField
from aquavaluate.services.column_mapper import project


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_read_lowercases_headers_and_keeps_strings(tmp_path: Path):
    path = _write(tmp_path, "s.csv", "Site,As,Pb\nWell A,0.010,0.03\n")
    table = read_csv_table(path)
    assert table == [["site", "as", "pb"], ["Well A", "0.010", "0.03"]]


def test_empty_cells_stay_empty_strings(tmp_path: Path):
    path = _write(tmp_path, "s.csv", "site,as\nW1,\nW2,NA\n")
    table = read_csv_table(path)
    # NA も文字列のまま
    assert table[1:] == [["W1", ""], ["W2", "NA"]]


def test_blank_lines_are_skipped(tmp_path: Path):
    path = _write(tmp_path, "s.csv", "site,as\n\nW1,0.1\n\nW2,0.2\n")
    assert len(read_csv_table(path)) == 3


def test_short_rows_keep_missing_cells_absent(tmp_path: Path):
    path = _write(tmp_path, "s.csv", "site,as,lat\nW1,0.1\nW2,0.2,\n")
    table = read_csv_table(path)
    assert table[1] == ["W1", "0.1"]
    # 書かれた空セルは残る
    assert table[2] == ["W2", "0.2", ""]


def test_short_row_field_absent_after_projection(tmp_path: Path):
    path = _write(tmp_path, "s.csv", "site,as,lat\nW1,0.1\n")
    (rec,) = project(read_csv_table(path), {StandardField.LATITUDE: "lat", StandardField.ARSENIC: "as"})
    assert rec.values == {StandardField.ARSENIC: "0.1"}


def test_long_rows_cut_to_header_width(tmp_path: Path):
    path = _write(tmp_path, "s.csv", "site,as\nW1,0.1,\nW2,0.2\nW3,0.3,9,9\n")
    assert read_csv_table(path) == [["site", "as"], ["W1", "0.1"], ["W2", "0.2"], ["W3", "0.3"]]


def test_utf8_bom_is_stripped(tmp_path: Path):
    p = tmp_path / "bom.csv"
    p.write_bytes("\ufeffSite,As\nW1,0.1\n".encode("utf-8"))
    assert read_csv_table(p)[0] == ["site", "as"]


def test_non_csv_suffix_rejected(tmp_path: Path):
    path = _write(tmp_path, "s.txt", "site,as\n")
    with pytest.raises(InvalidFileTypeError):
        read_csv_table(path)


def test_empty_file_rejected(tmp_path: Path):
    path = _write(tmp_path, "empty.csv", "")
    with pytest.raises(EmptyTableError):
        read_csv_table(path)


def test_header_only_file(tmp_path: Path):
    path = _write(tmp_path, "h.csv", "Site,As\n")
    assert read_csv_table(path) == [["site", "as"]]


def test_error_hierarchy():
    assert issubclass(InvalidFileTypeError, CsvReadError)
    assert issubclass(EmptyTableError, CsvReadError)


def test_frame_to_table_drops_trailing_padding():
    df = pd.DataFrame([["A", "B", "C"], ["1", None, None], ["2", "", None]])
    assert frame_to_table(df) == [["a", "b", "c"], ["1"], ["2", ""]]
