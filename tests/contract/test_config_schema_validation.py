from __future__ import annotations

import json

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from aquavaluate.config.loader import SCHEMA_PATH
from aquavaluate.models.standard_fields import METRIC_FIELDS, StandardField

"""Config schema contract test (bundled config_schema.json)."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_schema_is_valid_draft07(schema):
    jsonschema.Draft7Validator.check_schema(schema)


def test_full_example_validates(schema):
    config = yaml.safe_load("""
source_directory: ./data
output_directory: ./output
mapping:
  location_name: Site
  latitude: Lat
  longitude: Lon
  date: Sampled
  arsenic: As
suggest_mapping: true
imputation:
  enabled: true
  model: gemini-2.0-flash
  location_context: null
export_formats: [json]
weights:
  arsenic: 2
  mercury: 1.5
""")
    jsonschema.validate(config, schema)


def test_mapping_keys_match_registry(schema):
    assert set(schema["properties"]["mapping"]["properties"]) == {f.value for f in StandardField}


def test_weight_keys_match_metric_fields(schema):
    assert set(schema["definitions"]["metricField"]["enum"]) == {f.value for f in METRIC_FIELDS}


def test_source_directory_required(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate({"output_directory": "./out"}, schema)


def test_duplicate_export_formats_rejected(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate({"source_directory": "d", "export_formats": ["csv", "csv"]}, schema)
