from .client import AIClientError, get_genai_client
from .imputation import GeminiImputer, ImputationError, ImputationResult, Imputer
from .mapping_suggestion import suggest_column_mapping

__all__ = [
    "AIClientError",
    "get_genai_client",
    "GeminiImputer",
    "ImputationError",
    "ImputationResult",
    "Imputer",
    "suggest_column_mapping",
]
