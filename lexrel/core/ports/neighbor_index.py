# lexrel/core/ports/neighbor_index.py
from typing import List, Protocol

import numpy as np

from lexrel.core.domain.models import Neighbor

class INeighborIndex(Protocol):
    """
    Port for k-nearest-neighbour search over a fixed set of word vectors.
    Implementations: KDTreeNeighborIndex (scipy k-d tree, Euclidean metric).
    """

    def k_nearest(self, query: np.ndarray, k: int) -> List[Neighbor]:
        """
        Returns up to `k` neighbours ordered by increasing distance.

        Args:
            query: The query vector.
            k: Maximum number of hits. `k <= 0` yields an empty list.

        Raises:
            InvalidInputError: If the query dimensionality differs from the index.
        """
        ...

    def is_empty(self) -> bool:
        """True if no record was ever inserted."""
        ...

    def __len__(self) -> int:
        ...
