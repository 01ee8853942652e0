from __future__ import annotations

import logging
from typing import Any

from ..codec.csv_codec import IMPUTED_MARKER
from ..models.config_models import DEFAULT_MODEL
from ..models.imputation import ImputationResult, Imputer
from .client import AIClientError, generate_json, get_genai_client

"""AI imputation collaborator.

Contract: CSV text in (missing values are empty cells), CSV text out with every
filled-in value suffixed by ``*``. The pipeline treats implementations as
opaque; any callable matching ``Imputer`` (aquavaluate.models.imputation) can be
plugged in (tests use fakes).
"""

__all__ = [
    "ImputationResult",
    "ImputationError",
    "Imputer",
    "GeminiImputer",
    "build_imputation_prompt",
]

logger = logging.getLogger(__name__)

_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "imputedData": {
            "type": "STRING",
            "description": (
                "CSV string with imputed groundwater heavy metal concentration data. "
                f"Every AI-imputed value carries a trailing '{IMPUTED_MARKER}'."
            ),
        },
    },
    "required": ["imputedData"],
}


class ImputationError(Exception):
    """Raised when the imputation collaborator fails or answers malformed data."""


def build_imputation_prompt(data: str, location_context: str | None = None) -> str:
    return f"""You are an expert in groundwater heavy metal concentration data analysis tasked with imputing missing values.

Instructions:
1. Receive a CSV string of groundwater heavy metal concentration data. Missing values are empty strings.
2. Analyze location, depth, and neighboring sample values to impute reasonable values.
3. Mark every value you impute by appending '{IMPUTED_MARKER}' directly after the number (for example 0.08{IMPUTED_MARKER}). Do not mark values that were already present.
4. Keep the header row, the column order and the number of rows exactly as given. Do not quote cells.
5. Return the CSV string with the imputed data as the imputedData field.

Location context: {location_context or ""}

Data:
{data}
"""


class GeminiImputer:
    """Imputer backed by a Gemini model through google-genai.

    One request per call, no retry: a failure is reported to the pipeline,
    which aborts the run for that table.
    """

    def __init__(self, model: str = DEFAULT_MODEL, *, api_key: str | None = None, client: Any = None) -> None:
        self.model = model
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = get_genai_client(self._api_key)
        return self._client

    def __call__(self, data: str, location_context: str | None = None) -> ImputationResult:
        prompt = build_imputation_prompt(data, location_context)
        logger.debug("imputation request model=%s chars=%d", self.model, len(data))
        try:
            payload = generate_json(self._get_client(), self.model, prompt, _RESPONSE_SCHEMA)
        except AIClientError as e:
            raise ImputationError(str(e)) from e
        imputed = payload.get("imputedData") if isinstance(payload, dict) else None
        if not isinstance(imputed, str):
            raise ImputationError("imputation response has no imputedData string")
        return ImputationResult(imputed_data=imputed)
