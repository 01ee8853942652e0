from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

"""Imputation collaborator contract.

CSV text in (missing values are empty cells), CSV text out with every filled-in
value suffixed by ``*``. Kept free of any model client so the pipeline can be
imported and tested without one.
"""

__all__ = [
    "ImputationResult",
    "Imputer",
]


@dataclass(frozen=True)
class ImputationResult:
    imputed_data: str  # annotated CSV text


class Imputer(Protocol):
    def __call__(self, data: str, location_context: str | None = None) -> ImputationResult: ...
