from __future__ import annotations

import json
import os
from typing import Any

from google import genai
from google.genai import types

"""Thin wrapper around the google-genai client shared by the AI collaborators.

API key resolution order: explicit argument, GEMINI_API_KEY, GOOGLE_API_KEY.
The CLI loads .env before anything here runs, so keys placed there are visible
through os.environ.
"""

__all__ = [
    "API_KEY_ENV_VARS",
    "AIClientError",
    "resolve_api_key",
    "get_genai_client",
    "generate_json",
]

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


class AIClientError(Exception):
    """Raised when the generative model cannot be reached or answers unusably."""


def resolve_api_key(explicit: str | None = None) -> str | None:
    if explicit:
        return explicit
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None


def get_genai_client(api_key: str | None = None) -> Any:
    key = resolve_api_key(api_key)
    if not key:
        raise AIClientError(f"no API key configured (set one of {', '.join(API_KEY_ENV_VARS)})")
    try:
        return genai.Client(api_key=key)
    except Exception as e:
        raise AIClientError(f"failed to create genai client: {e}") from e


def _strip_code_fence(text: str) -> str:
    # モデルが ```json ... ``` で囲んで返すケースの除去
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()


def generate_json(client: Any, model: str, prompt: str, schema: dict[str, Any]) -> Any:
    """Run one structured-output request and return the decoded JSON payload.

    Raises:
        AIClientError: request failure, empty response, or invalid JSON
    """
    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=schema,
    )
    try:
        response = client.models.generate_content(model=model, contents=prompt, config=config)
    except Exception as e:
        raise AIClientError(f"generate_content failed: {e}") from e
    text = getattr(response, "text", None)
    if not text:
        raise AIClientError("model returned an empty response")
    try:
        return json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise AIClientError(f"model response is not valid JSON: {e}") from e
