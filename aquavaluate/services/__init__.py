"""Core pipeline services: column mapping, HMPI scoring, remapping, orchestration."""

from .column_mapper import project
from .pipeline import process_with_ai, process_without_ai
from .remapper import reconcile, reprocess
from .scoring import classify, compute_hmpi, score

__all__ = [
    "project",
    "score",
    "compute_hmpi",
    "classify",
    "reconcile",
    "reprocess",
    "process_with_ai",
    "process_without_ai",
]
