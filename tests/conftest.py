# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from aquavaluate.models.imputation import ImputationResult
from aquavaluate.models.standard_fields import StandardField


class FillBlanksImputer:
    """Fake imputation collaborator: fills every empty body cell with ``<value>*``.

    Records each call so tests can check what the pipeline sent.
    """

    def __init__(self, value: str = "4.1") -> None:
        self.value = value
        self.calls: list[tuple[str, str | None]] = []

    def __call__(self, data: str, location_context: str | None = None) -> ImputationResult:
        self.calls.append((data, location_context))
        lines = data.split("\n")
        out = [lines[0]]
        for line in lines[1:]:
            cells = [c if c != "" else f"{self.value}*" for c in line.split(",")]
            out.append(",".join(cells))
        return ImputationResult(imputed_data="\n".join(out))


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
mapping:
  location_name: Site
  latitude: Lat
  longitude: Lon
  arsenic: As
  lead: Pb
  zinc: Zn
imputation:
  enabled: false
  location_context: Alluvial aquifer, Punjab
export_formats: [csv, json]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "aquavaluate.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_text() -> str:
    # Well A: all at standard -> 1.00 Medium
    # Well B: As x2, Pb x3, Zn missing -> 2.50 High
    # Well C: 0.1 / 0.2 / 0.1 of standard -> 0.13 Low
    return (
        "Site,Lat,Lon,As,Pb,Zn\n"
        "Well A,30.1,75.2,0.01,0.01,5\n"
        "Well B,30.2,75.3,0.02,0.03,\n"
        "Well C,30.3,75.4,0.001,0.002,0.5\n"
    )


@pytest.fixture()
def sample_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    path = temp_workdir / "data" / "samples.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture()
def sample_table() -> list[list[object]]:
    return [
        ["site", "lat", "lon", "as", "pb", "zn"],
        ["Well A", "30.1", "75.2", "0.01", "0.01", "5"],
        ["Well B", "30.2", "75.3", "0.02", "0.03", ""],
        ["Well C", "30.3", "75.4", "0.001", "0.002", "0.5"],
    ]


@pytest.fixture()
def sample_mapping() -> dict[StandardField, str]:
    return {
        StandardField.LOCATION_NAME: "site",
        StandardField.LATITUDE: "lat",
        StandardField.LONGITUDE: "lon",
        StandardField.ARSENIC: "as",
        StandardField.LEAD: "pb",
        StandardField.ZINC: "zn",
    }


@pytest.fixture()
def fill_blanks_imputer() -> FillBlanksImputer:
    return FillBlanksImputer()
