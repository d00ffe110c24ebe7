# lexrel/core/services/similarity.py
"""
Cosine based relatedness scoring.

The score of two vectors is the cosine distance `d = 1 - cos(theta)` folded
back into a similarity and clamped to [0, 1]:

    score = max(0, 1 - d) = max(0, cos(theta))

so identical directions score 1.0 and orthogonal or opposite ones score 0.0.
"""

from typing import Optional

import numpy as np

from lexrel.core.domain.exceptions import InvalidInputError


def normalize_similarity(distance: float) -> float:
    """Turns a cosine distance into a relatedness score in [0, 1]."""
    similarity = 1.0 - distance
    if similarity < 0.0:
        return 0.0
    return min(similarity, 1.0)


class CosineSimilarityScorer:
    """
    Scores pairs of word vectors.

    Stateless; one instance can be shared by any number of callers.
    """

    def cosine_distance(self, v1: Optional[np.ndarray], v2: Optional[np.ndarray]) -> float:
        """
        Compute the cosine distance between two vectors.

        Args:
            v1: First vector
            v2: Second vector

        Returns:
            `1 - cos(theta)`, between 0 and 2

        Raises:
            InvalidInputError: If a vector is missing, empty or all zeros, or
                if the dimensions differ
        """
        a = self._as_vector(v1, "first")
        b = self._as_vector(v2, "second")

        if a.shape != b.shape:
            raise InvalidInputError(
                f"vector dimensions must match: {a.shape[0]} != {b.shape[0]}"
            )

        unit_a = self._unit(a)
        unit_b = self._unit(b)

        # Identical vectors must score exactly 1.0, whatever the summation order
        if np.array_equal(a, b):
            return 0.0

        cosine = float(np.dot(unit_a, unit_b))
        return 1.0 - cosine

    def score(self, v1: Optional[np.ndarray], v2: Optional[np.ndarray]) -> float:
        """
        Relatedness of two vectors in [0, 1].

        Raises:
            InvalidInputError: Same conditions as `cosine_distance`.
        """
        return normalize_similarity(self.cosine_distance(v1, v2))

    @staticmethod
    def _as_vector(vector: Optional[np.ndarray], position: str) -> np.ndarray:
        if vector is None:
            raise InvalidInputError(f"{position} vector is missing")
        array = np.asarray(vector, dtype=np.float64)
        if array.ndim != 1 or array.size == 0:
            raise InvalidInputError(f"{position} vector must be a non-empty 1-D array")
        return array

    @staticmethod
    def _unit(vector: np.ndarray) -> np.ndarray:
        # Scale by the largest component first: squaring tiny or huge
        # components directly underflows to 0 or overflows to inf.
        peak = float(np.max(np.abs(vector)))
        if peak == 0.0:
            raise InvalidInputError("cosine is undefined for a zero vector")
        scaled = vector / peak
        return scaled / np.linalg.norm(scaled)
