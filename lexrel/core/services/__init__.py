# lexrel/core/services/__init__.py
"""Pure domain services (no I/O)."""

from .similarity import CosineSimilarityScorer, normalize_similarity

__all__ = [
    "CosineSimilarityScorer",
    "normalize_similarity",
]
