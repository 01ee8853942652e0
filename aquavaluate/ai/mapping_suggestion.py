from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from ..models.config_models import DEFAULT_MODEL
from ..models.standard_fields import ColumnMapping, StandardField, mapping_from_raw
from .client import AIClientError, generate_json, get_genai_client

"""Column mapping suggestion collaborator.

Asks the model to match CSV headers to standard fields. Failure is never fatal:
the caller gets an empty mapping and falls back to the configured / manual one.
"""

__all__ = [
    "suggest_column_mapping",
    "build_mapping_prompt",
]

logger = logging.getLogger(__name__)

_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        f.value: {
            "type": "STRING",
            "description": f"CSV header that maps to the '{f.label}' standard field.",
        }
        for f in StandardField
    },
}


def build_mapping_prompt(headers: Sequence[str]) -> str:
    fields = json.dumps({f.value: f.label for f in StandardField}, indent=2)
    return f"""You are an expert data analyst in environmental data. Map CSV headers to the predefined standard fields.

Instructions:
1. Receive a list of CSV headers.
2. Match each header to one of the standard fields: {fields}.
3. Consider common abbreviations and variations (e.g., 'lat' -> 'latitude', 'As' -> 'Arsenic').
4. Return a JSON object where keys are standard field names and values are the corresponding headers.
5. Omit any field without a confident match.

CSV headers:
{json.dumps(list(headers))}
"""


def suggest_column_mapping(
    headers: Sequence[str],
    *,
    model: str = DEFAULT_MODEL,
    api_key: str | None = None,
    client: Any = None,
) -> ColumnMapping:
    """Suggest a StandardField -> header mapping for ``headers``.

    Suggestions naming a header that is not in ``headers`` are discarded.

    Returns:
        Partial mapping; empty on any failure ("no suggestion").
    """
    if not headers:
        return {}
    try:
        client = client if client is not None else get_genai_client(api_key)
        payload = generate_json(client, model, build_mapping_prompt(headers), _RESPONSE_SCHEMA)
    except AIClientError as e:
        logger.warning("mapping suggestion unavailable: %s", e)
        return {}
    if not isinstance(payload, dict):
        logger.warning("mapping suggestion ignored: expected object, got %s", type(payload).__name__)
        return {}
    known = set(headers)
    mapping = {f: h for f, h in mapping_from_raw(payload).items() if h in known}
    logger.debug("mapping suggestion fields=%s", sorted(f.value for f in mapping))
    return mapping
